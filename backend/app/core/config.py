from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    app_env: str = "dev"
    app_port: int = 8080
    log_level: str = "INFO"

    # Spreadsheet API endpoint. No defaults for the URL or key: both must come from env.
    sheets_api_url: str = ""
    sheets_api_key: str = ""
    # "api_key" sends the key in sheets_api_key_header, "bearer" in Authorization
    sheets_auth_scheme: str = "api_key"
    sheets_api_key_header: str = "X-Api-Key"

    # Optional transport settings
    sheets_timeout_seconds: Optional[float] = None

    # Demo mode: submissions are logged and acknowledged without calling the API
    sheets_demo_mode: bool = False
    sheets_demo_delay_seconds: float = 0.0


    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
