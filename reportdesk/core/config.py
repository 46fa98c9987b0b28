from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_JWT_SECRET = "change-me-in-prod-with-at-least-32-bytes"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Critical variables should be provided via environment in production.
    """

    app_name: str = "Report Desk"
    environment: str = "development"
    log_level: str = "INFO"

    # Security
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    session_expires_minutes: int = 2 * 60

    # Session cookie
    session_cookie_name: str = "auth-token"
    session_cookie_secure: bool = False

    # Database
    database_url: str = "sqlite:///./data/reportdesk.sqlite3"

    # Reports listing
    reports_default_page_size: int = 10
    reports_max_page_size: int = 100

    # CORS (credentials are allowed, so no wildcard)
    cors_allow_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    model_config = SettingsConfigDict(env_prefix="APP_", env_file=".env", extra="ignore")

    @field_validator("jwt_secret_key")
    @classmethod
    def _secret_not_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("APP_JWT_SECRET_KEY must not be empty")
        return value

    @field_validator("session_expires_minutes", "reports_default_page_size", "reports_max_page_size")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be a positive integer")
        return value

    @model_validator(mode="after")
    def _check_production(self) -> "Settings":
        if self.environment == "production" and self.jwt_secret_key == DEFAULT_JWT_SECRET:
            raise ValueError("APP_JWT_SECRET_KEY must be set in production")
        if self.reports_default_page_size > self.reports_max_page_size:
            raise ValueError("reports_default_page_size exceeds reports_max_page_size")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]


settings = get_settings()
