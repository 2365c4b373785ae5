"""
Failure taxonomy for the spreadsheet API.

classify_response() is the only place that decides which kind a response is;
error_message() turns a kind into the text shown to the user.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

ORIGIN_DENIED_DETAIL = "Connection to the origin sheet denied"


class ConfigurationError(RuntimeError):
    pass


class SheetErrorKind(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    INVALID_CREDENTIAL = "invalid_credential"
    RESOURCE_NOT_FOUND = "resource_not_found"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    UNKNOWN_ERROR = "unknown_error"


@dataclass(frozen=True)
class SheetError:
    kind: SheetErrorKind
    status: Optional[int] = None


ERROR_MESSAGES = {
    SheetErrorKind.PERMISSION_DENIED: (
        "Google Sheet Access Denied: share the sheet with \"Anyone with the link\" "
        "as Editor and reconnect it in your spreadsheet API dashboard."
    ),
    SheetErrorKind.INVALID_CREDENTIAL: "Invalid API Key: please check your spreadsheet API key configuration.",
    SheetErrorKind.RESOURCE_NOT_FOUND: "Sheet Not Found: please verify your sheet ID and API connection.",
    SheetErrorKind.HTTP_ERROR: "API Error ({status}): please check your configuration and try again.",
    SheetErrorKind.NETWORK_ERROR: "Network Error: please check your internet connection and try again.",
    SheetErrorKind.UNKNOWN_ERROR: "Unexpected Error: please try again later or contact support.",
}


def is_success_status(status: int) -> bool:
    return 200 <= status < 300


def _origin_denied(body: Any) -> bool:
    if not isinstance(body, dict):
        return False
    detail = body.get("detail")
    return isinstance(detail, str) and ORIGIN_DENIED_DETAIL in detail


def classify_response(status: int, body: Any) -> Optional[SheetError]:
    if is_success_status(status):
        return None
    if status == 403 and _origin_denied(body):
        return SheetError(SheetErrorKind.PERMISSION_DENIED, status)
    if status == 401:
        return SheetError(SheetErrorKind.INVALID_CREDENTIAL, status)
    if status == 404:
        return SheetError(SheetErrorKind.RESOURCE_NOT_FOUND, status)
    return SheetError(SheetErrorKind.HTTP_ERROR, status)


def error_message(error: SheetError) -> str:
    return ERROR_MESSAGES[error.kind].format(status=error.status)
