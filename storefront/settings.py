# storefront/settings.py
from __future__ import annotations
import json
import logging
import os
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Vite dev server
DEFAULT_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


def split_origins(raw: Optional[str | List[str]]) -> List[str]:
    """CORS_ORIGINS may be a JSON list or a comma separated string."""
    if isinstance(raw, list):
        return raw
    text = (raw or "").strip()
    if not text:
        return list(DEFAULT_ORIGINS)
    if text.startswith("["):
        try:
            origins = json.loads(text)
        except json.JSONDecodeError:
            origins = None
        if isinstance(origins, list):
            return [str(o) for o in origins]
    return [o.strip() for o in text.split(",") if o.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    # http
    api_host: str = Field(default="127.0.0.1", validation_alias=AliasChoices("API_HOST",))
    api_port: int = Field(default=8000, validation_alias=AliasChoices("API_PORT",))
    cors_origins_raw: Optional[str | List[str]] = Field(
        default=None, validation_alias=AliasChoices("CORS_ORIGINS",)
    )

    # firebase project the store and auth live in
    firebase_project_id: str = Field(
        default="kicks-studio", validation_alias=AliasChoices("FIREBASE_PROJECT_ID",)
    )
    google_application_credentials: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("GOOGLE_APPLICATION_CREDENTIALS",)
    )

    # shop display; discount policy lives in services/pricing.py
    currency: str = Field(default="ZAR", validation_alias=AliasChoices("CURRENCY",))
    low_stock_threshold: int = Field(
        default=5, ge=1, validation_alias=AliasChoices("LOW_STOCK_THRESHOLD",)
    )

    log_level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL",))
    log_file: Optional[str] = Field(default=None, validation_alias=AliasChoices("LOG_FILE",))

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level

    @property
    def cors_origins(self) -> List[str]:
        return split_origins(self.cors_origins_raw)


settings = Settings()

# firebase_admin's ADC lookup reads this from the process env
if settings.google_application_credentials:
    os.environ.setdefault("GOOGLE_APPLICATION_CREDENTIALS", settings.google_application_credentials)
