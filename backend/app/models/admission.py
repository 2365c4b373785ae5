from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.integrations.sheets.errors import SheetErrorKind


class AdmissionFormError(Exception):
    """Base class for misuse of the admission form (bad field, locked form)."""


class UnknownFieldError(AdmissionFormError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown admission form field: {name!r}")
        self.name = name


class StudentRecord(BaseModel):
    """
    Snapshot of the admission form.

    Attribute names are snake_case; the camelCase names used by the page
    (studentName, fatherName, ..., class) are the aliases. Instances are frozen,
    so every edit produces a new snapshot via with_field().
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    student_name: str = Field(default="", alias="studentName")
    father_name: str = Field(default="", alias="fatherName")
    student_id: str = Field(default="", alias="studentId")
    phone_number: str = Field(default="", alias="phoneNumber")
    address: str = Field(default="", alias="address")
    admission_fee: str = Field(default="", alias="admissionFee")
    class_name: str = Field(default="", alias="class")
    admission_date: str = Field(default="", alias="admissionDate")

    @classmethod
    def empty(cls) -> "StudentRecord":
        return cls()

    @classmethod
    def resolve_field(cls, name: str) -> str:
        """Return the attribute name for either spelling of a field."""
        if name in cls.model_fields:
            return name
        attr = _ALIAS_TO_ATTR.get(name)
        if attr is None:
            raise UnknownFieldError(name)
        return attr

    def with_field(self, name: str, value: str) -> "StudentRecord":
        attr = self.resolve_field(name)
        return self.model_copy(update={attr: value})

    def missing_fields(self) -> list[str]:
        return [
            info.alias
            for attr, info in type(self).model_fields.items()
            if not getattr(self, attr).strip()
        ]

    def to_form(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


_ALIAS_TO_ATTR = {info.alias: attr for attr, info in StudentRecord.model_fields.items()}


class SubmissionResult(BaseModel):
    success: bool
    message: str = Field(min_length=1)
    data: Optional[Any] = None
    error: Optional[SheetErrorKind] = None

    @model_validator(mode="after")
    def _success_has_no_error(self) -> "SubmissionResult":
        if self.success and self.error is not None:
            raise ValueError("a successful result cannot carry an error kind")
        return self


class ConnectionStatus(str, Enum):
    UNKNOWN = "unknown"
    CONNECTED = "connected"
    ERROR = "error"


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    type: NotificationType
    message: str
