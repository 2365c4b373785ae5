"""
Admission form state.

The controller owns the one StudentRecord, the connection status and the
single active notification. All mutation happens on the event loop; submit and
probe are the only suspension points. Each of them records the generation it
started under, and a result that comes back after reset() is dropped.
"""
import asyncio
import logging
from typing import Any, Optional

from app.models.admission import (
    AdmissionFormError,
    ConnectionStatus,
    Notification,
    NotificationType,
    StudentRecord,
    SubmissionResult,
)

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


class FormLockedError(AdmissionFormError):
    pass


class AdmissionFormController:
    def __init__(self, client) -> None:
        self.client = client
        self.record = StudentRecord.empty()
        self.connection_status = ConnectionStatus.UNKNOWN
        self.notification: Optional[Notification] = None
        self.is_submitting = False
        self.is_probing = False
        self._submit_generation = 0
        self._probe_generation = 0

    def start(self) -> asyncio.Task:
        """Kick off the initial probe without waiting for it."""
        return asyncio.get_running_loop().create_task(self.refresh_connection())

    def snapshot(self) -> dict[str, Any]:
        return {
            "record": self.record.to_form(),
            "connection_status": self.connection_status.value,
            "notification": self.notification.model_dump(mode="json") if self.notification else None,
            "submitting": self.is_submitting,
            "probing": self.is_probing,
            "fields_disabled": self.is_submitting,
        }

    def update_field(self, name: str, value: str) -> StudentRecord:
        if self.is_submitting:
            raise FormLockedError("The form is locked while a submission is in progress")
        self.record = self.record.with_field(name, value)
        return self.record

    def dismiss_notification(self) -> None:
        self.notification = None

    def _notify(self, kind: NotificationType, message: str) -> None:
        self.notification = Notification(type=kind, message=message)

    def reset(self) -> None:
        """Start over; anything still in flight will not be applied."""
        self._submit_generation += 1
        self._probe_generation += 1
        self.record = StudentRecord.empty()
        self.notification = None
        self.is_submitting = False
        self.is_probing = False

    async def submit(self) -> Optional[SubmissionResult]:
        if self.is_submitting:
            logger.debug("Submit ignored, a submission is already in flight")
            return None

        missing = self.record.missing_fields()
        if missing:
            self._notify(NotificationType.ERROR, "Please fill in all required fields: " + ", ".join(missing))
            return None

        self.is_submitting = True
        self._submit_generation += 1
        generation = self._submit_generation
        snapshot = self.record
        try:
            result = await self.client.submit(snapshot)
        except Exception:
            logger.exception("Submission client raised instead of returning a result")
            if generation == self._submit_generation:
                self._notify(NotificationType.ERROR, UNEXPECTED_ERROR_MESSAGE)
            return None
        finally:
            if generation == self._submit_generation:
                self.is_submitting = False

        if generation != self._submit_generation:
            logger.info("Discarding stale submission result")
            return result if isinstance(result, SubmissionResult) else None

        if not isinstance(result, SubmissionResult):
            logger.error("Submission client returned %r instead of a SubmissionResult", result)
            self._notify(NotificationType.ERROR, UNEXPECTED_ERROR_MESSAGE)
            return None

        if result.success:
            self._notify(NotificationType.SUCCESS, result.message)
            self.record = StudentRecord.empty()
        else:
            self._notify(NotificationType.ERROR, result.message)
        return result

    async def refresh_connection(self) -> Optional[ConnectionStatus]:
        if self.is_probing:
            return None

        self.is_probing = True
        self._probe_generation += 1
        generation = self._probe_generation
        try:
            status = await self.client.probe_connection()
        except Exception:
            logger.exception("Connection probe raised")
            status = ConnectionStatus.ERROR
        finally:
            if generation == self._probe_generation:
                self.is_probing = False

        if generation != self._probe_generation:
            return None
        self.connection_status = status
        return status
