"""Application configuration with validation."""

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Application settings with validation.

    Built once at startup by ``get_settings()`` and handed to the services
    that need it; stores never read configuration on their own.
    """

    # Environment
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production)"
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./cabinet.db",
        description="Database connection URL"
    )
    # Connection pool tuning (PostgreSQL only; ignored for SQLite).
    db_pool_size: int = Field(
        default=5,
        description="Number of persistent database connections"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Extra connections allowed during traffic bursts"
    )
    db_pool_timeout: int = Field(
        default=30,
        description="Seconds to wait for a connection from the pool before raising"
    )
    db_pool_recycle: int = Field(
        default=1800,
        description="Seconds before a connection is recycled (prevents stale connections)"
    )

    # Storage
    # MAX_PAYLOAD_BYTES: ceiling for PUT bodies on files and boilerplates (256 KiB).
    max_payload_bytes: int = Field(
        default=262_144,
        description="Maximum accepted request body size in bytes"
    )
    default_file_mode: int = Field(
        default=0o644,
        description="Permission bits stored for files created over HTTP"
    )

    # Legacy layout import
    # LEGACY_ROOT: directory holding the old files/ and boilerplates/ trees.
    # Empty = no import at startup.
    legacy_root: Optional[str] = Field(
        default=None,
        description="Root of a legacy on-disk layout to replay at startup"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: 'json' for structured, 'text' for human-readable"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper

    @field_validator('max_payload_bytes')
    @classmethod
    def validate_max_payload(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("MAX_PAYLOAD_BYTES must be positive")
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        # Allow reading from environment variables with different case
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Return the process settings, parsed once from the environment."""
    return Settings()
