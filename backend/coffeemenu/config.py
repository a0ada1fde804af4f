"""
Coffee Menu Backend — Application Configuration
=================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
       The admin identity (username, password, token) lives here instead of
       in code, so fixtures and deployments can inject their own values.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the database layer, the auth service and the app factory.
When:  Loaded once at module import time; validated before app starts.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


DEFAULT_ADMIN_PASSWORD = "123"
DEFAULT_ADMIN_TOKEN = "secret-admin-token-12345"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Production deployments MUST override ADMIN_PASSWORD and ADMIN_TOKEN.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: Async SQLAlchemy connection string
    # Format: sqlite+aiosqlite:///./menu.db or postgresql+asyncpg://user:pw@host/db
    # The SQLite file is created on first connect if it does not exist
    database_url: str = Field(
        default="sqlite+aiosqlite:///./menu.db",
        description="Async SQLAlchemy database URL"
    )

    # Pool sizing only applies to server databases; SQLite uses NullPool
    db_pool_size: int = Field(default=5, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # ── Admin Identity ────────────────────────────────────────────────────
    # What: The single static admin account and the opaque token it receives
    # on login. Compared by exact string equality; never expires.
    admin_username: str = Field(default="admin")
    admin_password: str = Field(default=DEFAULT_ADMIN_PASSWORD)
    admin_token: str = Field(default=DEFAULT_ADMIN_TOKEN)

    # ── CORS ──────────────────────────────────────────────────────────────
    # What: Allowed origins for cross-origin requests
    # Default "*": the menu UI may be served from any host
    # Format: Comma-separated URLs (parsed by property below)
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3001, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the admin credentials were changed from defaults.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises a single ValueError.
        """
        errors = []
        if not self.admin_password or self.admin_password == DEFAULT_ADMIN_PASSWORD:
            errors.append("ADMIN_PASSWORD is empty or still the development default.")
        if not self.admin_token or self.admin_token == DEFAULT_ADMIN_TOKEN:
            errors.append("ADMIN_TOKEN is empty or still the development default.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
