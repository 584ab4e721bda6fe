"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management using Pydantic Settings.

This module implements the Singleton pattern to ensure a single global
configuration instance throughout the application lifecycle.

Features:
---------
- Environment variable loading with type validation
- .env file support for local development
- Computed properties for derived values

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Security Considerations:
-----------------------
- ADMIN_USER and ADMIN_PASS have no defaults. While either is unset every
  request to the admin prefix is rejected.
- Never commit .env files to version control

==============================================================================
"""

from __future__ import annotations

import json
import logging
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
        database_url: SQLAlchemy URL of the key-value store
        admin_user: HTTP Basic username for the admin prefix
        admin_pass: HTTP Basic password for the admin prefix
        admin_path_prefix: Path prefix guarded by the access gate
        public_base_url: Origin used when building share links
        customer_path: Path of the customer menu page
        max_token_length: Longest URL token accepted by the state resolver
        products_storage_key: Store key of the saved product catalog
        packages_storage_key: Store key of the saved package list
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings()
        >>> print(settings.admin_configured)
        False
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
        default="F&I Product Menu",
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
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

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
        default="sqlite:///./storage/db/fimenu.db",
        description="SQLAlchemy URL of the key-value store"
    )

    products_storage_key: str = Field(
        default="fi_products_v1",
        min_length=1,
        description="Store key holding the saved product catalog"
    )

    packages_storage_key: str = Field(
        default="fi_packages_v1",
        min_length=1,
        description="Store key holding the saved package list"
    )

    # =========================================================================
    # ADMIN ACCESS GATE
    # =========================================================================
    admin_user: Optional[str] = Field(
        default=None,
        description="HTTP Basic username for the admin area"
    )

    admin_pass: Optional[str] = Field(
        default=None,
        description="HTTP Basic password for the admin area"
    )

    admin_path_prefix: str = Field(
        default="/admin",
        description="Path prefix protected by HTTP Basic auth"
    )

    # =========================================================================
    # SHARE LINK SETTINGS
    # =========================================================================
    public_base_url: str = Field(
        default="http://localhost:8000",
        description="Origin used when building customer share links"
    )

    customer_path: str = Field(
        default="/customer",
        description="Path of the customer menu page"
    )

    max_token_length: int = Field(
        default=65536,
        ge=16,
        description="Longest URL token the state resolver will decode"
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
        """
        Validate and normalize application environment.

        Args:
            value: Raw environment value

        Returns:
            Lowercase normalized environment name
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("admin_user", "admin_pass")
    @classmethod
    def blank_as_unset(cls, value: Optional[str]) -> Optional[str]:
        """Treat empty credentials as not configured."""
        if value is None or value == "":
            return None
        return value

    @field_validator("admin_path_prefix", "customer_path")
    @classmethod
    def validate_path(cls, value: str) -> str:
        """Normalize to a leading slash and no trailing slash."""
        value = "/" + value.strip().strip("/")
        if value == "/":
            raise ValueError("Path must not be the site root")
        return value

    @field_validator("public_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def admin_configured(self) -> bool:
        """True when both admin credentials are set."""
        return bool(self.admin_user) and bool(self.admin_pass)

    @property
    def customer_base_url(self) -> str:
        """Absolute URL of the customer menu page."""
        return self.public_base_url + self.customer_path

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
            Path to database file, or None for non-SQLite or in-memory databases
        """
        if self.database_url.startswith("sqlite"):
            db_path = self.database_url.replace("sqlite:///", "")
            if not db_path or db_path.startswith("sqlite:") or db_path == ":memory:":
                return None
            if db_path.startswith("./"):
                db_path = db_path[2:]
            return Path(db_path)
        return None

    def ensure_directories(self) -> None:
        """Create the SQLite database directory if needed."""
        db_path = self.get_database_path()
        if db_path:
            db_path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Required directories created/verified")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"debug={self.debug}, "
            f"admin_configured={self.admin_configured})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Uses lru_cache so only one Settings instance is created. Tests call
    ``get_settings.cache_clear()`` after changing the environment.

    Returns:
        Global Settings instance
    """
    settings = Settings()

    settings.ensure_directories()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
