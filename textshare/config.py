# textshare/config.py
"""
Centralized application configuration using pydantic-settings.

All settings are read from environment variables or .env file.
Deployments only need to adjust .env - no code changes needed.
"""

import os
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from textshare.constants import HISTORY_CAPACITY, HISTORY_STORAGE_KEY


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Priority: environment variables > .env file > defaults
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )

    # --- Local storage ---
    STORAGE_URL: str = Field(
        default="sqlite:///textshare.db",
        description="SQLAlchemy URL of the key/value store backing history"
    )
    HISTORY_KEY: str = Field(
        default=HISTORY_STORAGE_KEY,
        description="Named key holding the serialized history list"
    )
    HISTORY_LIMIT: int = Field(
        default=HISTORY_CAPACITY,
        description="Maximum number of recent links kept"
    )

    # --- Links ---
    PUBLIC_ORIGIN: str = Field(
        default="",
        description="Origin used in generated links (request base URL when empty)"
    )
    APP_PATH: str = Field(
        default="/",
        description="Path component of generated links"
    )
    QR_SERVICE_URL: str = Field(
        default="https://api.qrserver.com/v1/create-qr-code/",
        description="External service rendering QR images for links"
    )
    QR_SIZE: int = Field(
        default=200,
        description="QR image edge in pixels"
    )

    # --- Server ---
    HOST: str = Field(
        default="127.0.0.1",
        description="Server bind host"
    )
    PORT: int = Field(
        default=8888,
        description="Server bind port"
    )
    SERVICE_NAME: str = Field(
        default="textshare",
        description="Service name reported to tracing"
    )

    # --- Debug / Logging ---
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}")
        return v_upper

    @field_validator("HISTORY_LIMIT")
    @classmethod
    def validate_history_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("HISTORY_LIMIT must be at least 1")
        return v

    @field_validator("APP_PATH")
    @classmethod
    def validate_app_path(cls, v: str) -> str:
        # links are origin + path, so the path must be absolute
        return v if v.startswith("/") else f"/{v}"


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance (singleton pattern)."""
    return Settings()


# --- Singleton instance for easy import ---
settings = get_settings()


# --- Module-level exports ---

# Storage
STORAGE_URL: str = settings.STORAGE_URL
HISTORY_KEY: str = settings.HISTORY_KEY
HISTORY_LIMIT: int = settings.HISTORY_LIMIT

# Links
PUBLIC_ORIGIN: str = settings.PUBLIC_ORIGIN
APP_PATH: str = settings.APP_PATH

# Server
HOST: str = settings.HOST
PORT: int = settings.PORT
DEBUG: bool = settings.DEBUG
LOG_LEVEL: str = settings.LOG_LEVEL
SERVICE_NAME: str = settings.SERVICE_NAME

# --- Paths (computed, not from env) ---
PROJECT_ROOT: str = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
LOGS_PATH: str = os.path.join(PROJECT_ROOT, "logs")
