"""
Credential header strategies.

Spreadsheet API providers disagree on where the key goes: Sheetbest expects a
custom X-Api-Key header, Sheety a bearer token. The scheme is picked from
settings so the client never hardcodes one.
"""
from app.core.config import Settings
from app.integrations.sheets.errors import ConfigurationError


class NoAuth:
    scheme = "none"

    def headers(self) -> dict[str, str]:
        return {}


class ApiKeyHeaderAuth:
    scheme = "api_key"

    def __init__(self, api_key: str, header_name: str = "X-Api-Key") -> None:
        self.api_key = api_key
        self.header_name = header_name

    def headers(self) -> dict[str, str]:
        return {self.header_name: self.api_key}


class BearerTokenAuth:
    scheme = "bearer"

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}


def build_auth(settings: Settings):
    scheme = settings.sheets_auth_scheme.strip().lower()
    if scheme == ApiKeyHeaderAuth.scheme:
        if not settings.sheets_api_key:
            return NoAuth()
        return ApiKeyHeaderAuth(settings.sheets_api_key, settings.sheets_api_key_header)
    if scheme == BearerTokenAuth.scheme:
        if not settings.sheets_api_key:
            return NoAuth()
        return BearerTokenAuth(settings.sheets_api_key)
    raise ConfigurationError(
        f"Unsupported sheets_auth_scheme {settings.sheets_auth_scheme!r}; expected 'api_key' or 'bearer'"
    )
