"""
Application Settings
Load from environment variables
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    PORT: int = 5001
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # ======================
    # Projection
    # ======================
    # months shown after the last recorded entry on the dashboard charts
    PROJECTION_HORIZON: int = 12

    # ======================
    # Email (SendGrid SMTP relay)
    # ======================
    SENDGRID_API_KEY: Optional[str] = None
    SMTP_HOST: str = "smtp.sendgrid.net"
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = "apikey"
    SMTP_USE_TLS: bool = True
    SMTP_TIMEOUT: float = 10.0
    MAIL_FROM_EMAIL: str = "support@opessocius.com"
    MAIL_FROM_NAME: str = "Opessocius Support"
    APP_URL: str = "https://investment-tracker-new.web.app"

    @property
    def email_configured(self) -> bool:
        return bool(self.SENDGRID_API_KEY)


@lru_cache
def get_settings() -> Settings:
    return Settings()
