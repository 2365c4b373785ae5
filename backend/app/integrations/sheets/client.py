"""
Spreadsheet API client.

Writes one admission row per submit and offers a read-only probe used to show
connectivity. Every failure is turned into a SubmissionResult; nothing raised
by the transport escapes submit() or probe_connection().
"""
import asyncio
import json
import logging
from typing import Any, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from app.core.config import Settings, settings
from app.integrations.sheets.auth import build_auth
from app.integrations.sheets.errors import (
    ConfigurationError,
    SheetError,
    SheetErrorKind,
    classify_response,
    error_message,
    is_success_status,
)
from app.integrations.sheets.payload import build_sheet_row
from app.models.admission import ConnectionStatus, StudentRecord, SubmissionResult

logger = logging.getLogger(__name__)

SUBMIT_SUCCESS_MESSAGE = "Student form submitted successfully to Google Sheets!"
DEMO_SUCCESS_MESSAGE = "Demo Mode: form data logged successfully, nothing was sent to Google Sheets."

NETWORK_ERRORS = (URLError, ConnectionError, TimeoutError)


def _send(request: Request, timeout: Optional[float]) -> tuple[int, bytes]:
    """Perform the request, returning (status, body) for any HTTP status."""
    kwargs = {} if timeout is None else {"timeout": timeout}
    try:
        with urlopen(request, **kwargs) as response:  # noqa: S310
            return response.status, response.read()
    except HTTPError as exc:
        try:
            return exc.code, exc.read()
        finally:
            exc.close()


def _parse_body(raw: bytes) -> Any:
    text = raw.decode("utf-8", errors="replace")
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


class SheetsClient:
    def __init__(self, config: Optional[Settings] = None) -> None:
        config = config or settings
        self.api_url = config.sheets_api_url.strip()
        self.timeout = config.sheets_timeout_seconds
        self.demo_mode = config.sheets_demo_mode
        self.demo_delay = config.sheets_demo_delay_seconds
        self.auth = build_auth(config)
        if not self.api_url and not self.demo_mode:
            raise ConfigurationError("SHEETS_API_URL is not set")

    def wiring(self) -> dict:
        """Which settings this client runs with; never the credential itself."""
        return {
            "api_url_set": bool(self.api_url),
            "api_key_set": bool(self.auth.headers()),
            "auth_scheme": self.auth.scheme,
            "demo_mode": self.demo_mode,
        }

    def _request(self, method: str, payload: Optional[dict[str, str]] = None) -> Request:
        headers = {"Accept": "application/json", **self.auth.headers()}
        body = None
        if payload is not None:
            body = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        return Request(self.api_url, data=body, method=method, headers=headers)

    @staticmethod
    def _failure(error: SheetError) -> SubmissionResult:
        return SubmissionResult(success=False, message=error_message(error), error=error.kind)

    async def _demo_submit(self, record: StudentRecord) -> SubmissionResult:
        logger.info("Demo mode: admission that would be submitted: %s", record.to_form())
        if self.demo_delay > 0:
            await asyncio.sleep(self.demo_delay)
        return SubmissionResult(success=True, message=DEMO_SUCCESS_MESSAGE, data=record.to_form())

    async def submit(self, record: StudentRecord) -> SubmissionResult:
        if self.demo_mode:
            return await self._demo_submit(record)

        try:
            row = build_sheet_row(record)
            logger.info(
                "Submitting admission student_id=%s to %s (auth=%s)",
                record.student_id,
                self.api_url,
                self.auth.scheme,
            )
            status, raw = await asyncio.to_thread(_send, self._request("POST", row), self.timeout)
            body = _parse_body(raw)
        except NETWORK_ERRORS as exc:
            logger.warning("Spreadsheet API unreachable at %s: %s", self.api_url, exc)
            return self._failure(SheetError(SheetErrorKind.NETWORK_ERROR))
        except Exception:
            logger.exception("Unexpected failure submitting admission student_id=%s", record.student_id)
            return self._failure(SheetError(SheetErrorKind.UNKNOWN_ERROR))

        logger.debug("Spreadsheet API responded status=%s", status)
        error = classify_response(status, body)
        if error is not None:
            logger.warning("Spreadsheet API rejected admission: kind=%s status=%s body=%r", error.kind.value, status, body)
            return self._failure(error)

        return SubmissionResult(success=True, message=SUBMIT_SUCCESS_MESSAGE, data=body)

    async def probe_connection(self) -> ConnectionStatus:
        if self.demo_mode:
            return ConnectionStatus.CONNECTED

        try:
            status, _ = await asyncio.to_thread(_send, self._request("GET"), self.timeout)
        except Exception as exc:
            logger.warning("Spreadsheet API probe failed: %s", exc)
            return ConnectionStatus.ERROR

        if is_success_status(status):
            return ConnectionStatus.CONNECTED
        logger.warning("Spreadsheet API probe returned status=%s", status)
        return ConnectionStatus.ERROR
