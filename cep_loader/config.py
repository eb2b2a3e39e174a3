"""Configuration management using Pydantic Settings."""

import os
import re

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_POSTAL_CODE_PATTERN = re.compile(r"^\d{5}-?\d{3}$")
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Function settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Only load .env file in development (not Lambda/production)
        env_file=".env" if os.getenv("AWS_EXECUTION_ENV") is None else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Lookup Configuration
    postal_code: str = "08111430"
    lookup_base_url: str = "https://viacep.com.br/ws"
    lookup_timeout_seconds: float = 10.0

    # Database Configuration
    database_url: str | None = None
    target_table: str = "TesteFunction"
    target_schema: str | None = None

    # Invocation Configuration
    fail_on_persist_error: bool = False
    log_level: str = "INFO"

    @field_validator("postal_code")
    @classmethod
    def normalize_postal_code(cls, v: str) -> str:
        """Accept NNNNNNNN or NNNNN-NNN and store digits only."""
        v = v.strip()
        if not _POSTAL_CODE_PATTERN.match(v):
            raise ValueError(f"Postal code must have 8 digits, got {v!r}")
        return v.replace("-", "")

    @field_validator("lookup_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL without a trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Lookup base URL must be http(s), got {v!r}")
        return v.rstrip("/")

    @field_validator("lookup_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Lookup timeout must be positive")
        return v

    @field_validator("database_url", "target_schema", mode="before")
    @classmethod
    def convert_empty_string_to_none(cls, v):
        """Convert empty strings to None so a blank variable counts as unset."""
        if v is None:
            return None
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @field_validator("target_table")
    @classmethod
    def validate_table_name(cls, v: str) -> str:
        if not _IDENTIFIER_PATTERN.match(v):
            raise ValueError(f"Invalid table name: {v!r}")
        return v

    @field_validator("target_schema")
    @classmethod
    def validate_schema_name(cls, v: str | None) -> str | None:
        """Allow a plain schema or a dotted database.owner pair (SQL Server)."""
        if v is None:
            return None
        if not all(_IDENTIFIER_PATTERN.match(part) for part in v.split(".")):
            raise ValueError(f"Invalid schema name: {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v!r}")
        return v.upper()


# Global settings instance
settings = Settings()
