"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

SEVEN_DAYS_SECONDS = 7 * 24 * 60 * 60


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    google_service_account_email: str
    google_private_key: str
    google_spreadsheet_id: str
    session_secret: str
    session_cookie_name: str = "whats-cookin-session"
    session_max_age_seconds: int = SEVEN_DAYS_SECONDS
    allowed_emails: str | None = None
    sheets_base_url: str = "https://sheets.googleapis.com/v4"
    google_userinfo_url: str = "https://www.googleapis.com/oauth2/v2/userinfo"
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def private_key_pem(self) -> str:
        """Private key with escaped newlines restored."""
        return self.google_private_key.replace("\\n", "\n")

    @property
    def secure_cookies(self) -> bool:
        """Only mark cookies Secure outside local development."""
        return self.environment == "production"


def parse_allowed_emails(raw: str | None) -> set[str] | None:
    """Parse the optional email allow-list from env."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return None
    emails: set[str] = set()
    for chunk in cleaned.split(","):
        value = chunk.strip().lower()
        if not value:
            continue
        if "@" in value:
            emails.add(value)
    return emails or None
