"""
==============================================================================
Application Settings Module
==============================================================================

Configuration for the visualizer service using Pydantic Settings.

A single cached Settings instance is shared across the application.

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Auth Gate Tuning:
----------------
- SESSION_TIMEOUT_MINUTES: lifetime of an admin session (sliding)
- MAX_FAILED_ATTEMPTS: consecutive failures before lockout
- LOCKOUT_DURATION_MINUTES: how long verification is refused
- KDF_ROUNDS: PBKDF2 iterations for the admin password digest

==============================================================================
"""

from __future__ import annotations

import json
import logging
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        database_url: SQLAlchemy connection string for the slot store
        session_timeout_minutes: Admin session lifetime
        max_failed_attempts: Failed verifications before lockout
        lockout_duration_minutes: Lockout window length
        min_password_length: Shortest accepted admin password
        kdf_rounds: PBKDF2 iteration count
        kdf_digest_size: Digest length in bytes (hex string is twice as long)
        salt_length: Length of the generated salt string
        scan_history_limit: Number of scans kept in history
        catalog_seed_file: Optional JSON file replacing the built-in seed
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings()
        >>> settings.session_timeout
        datetime.timedelta(seconds=1800)
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Furniture Visualizer API",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(default="0.0.0.0", description="Server bind address")

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # STORAGE SETTINGS
    # =========================================================================
    database_url: str = Field(
        default="sqlite:///./storage/db/visualizer.db",
        description="SQLAlchemy connection string for the slot store"
    )

    # =========================================================================
    # AUTH GATE SETTINGS
    # =========================================================================
    session_timeout_minutes: int = Field(
        default=30,
        ge=1,
        le=1440,
        description="Admin session lifetime in minutes"
    )

    max_failed_attempts: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Consecutive failed verifications before lockout"
    )

    lockout_duration_minutes: int = Field(
        default=15,
        ge=1,
        le=1440,
        description="Lockout window in minutes"
    )

    min_password_length: int = Field(
        default=6,
        ge=1,
        le=128,
        description="Minimum admin password length"
    )

    kdf_rounds: int = Field(
        default=100_000,
        ge=1,
        description="PBKDF2-HMAC iteration count"
    )

    kdf_digest_size: int = Field(
        default=32,
        ge=16,
        le=64,
        description="Digest size in bytes"
    )

    salt_length: int = Field(
        default=32,
        ge=16,
        le=128,
        description="Generated salt length in characters"
    )

    # =========================================================================
    # CATALOG & HISTORY SETTINGS
    # =========================================================================
    scan_history_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Number of scans kept in history"
    )

    catalog_seed_file: Optional[str] = Field(
        default=None,
        description="JSON file replacing the built-in seed records"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """Normalize the environment name, falling back to development."""
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def session_timeout(self) -> timedelta:
        """Session lifetime as a timedelta."""
        return timedelta(minutes=self.session_timeout_minutes)

    @property
    def lockout_duration(self) -> timedelta:
        """Lockout window as a timedelta."""
        return timedelta(minutes=self.lockout_duration_minutes)

    @property
    def catalog_seed_path(self) -> Optional[Path]:
        """Seed file as a Path, or None when the built-in seed is used."""
        if not self.catalog_seed_file:
            return None
        return Path(self.catalog_seed_file)

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    def get_database_path(self) -> Optional[Path]:
        """
        Extract database file path for SQLite databases.

        Returns:
            Path to database file, or None for in-memory/non-SQLite databases
        """
        if not self.database_url.startswith("sqlite:///"):
            return None

        db_path = self.database_url.replace("sqlite:///", "", 1)
        if not db_path or db_path == ":memory:":
            return None
        if db_path.startswith("./"):
            db_path = db_path[2:]
        return Path(db_path)

    def ensure_directories(self) -> None:
        """Create the SQLite database directory when needed."""
        db_path = self.get_database_path()
        if db_path:
            db_path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Required directories created/verified")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance.

    Uses lru_cache so only one Settings instance is created for the
    lifetime of the process.

    Returns:
        Global Settings instance
    """
    settings = Settings()
    settings.ensure_directories()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
