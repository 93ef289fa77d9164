"""
MemoPad — Application Configuration
====================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the application factory, the network helpers and the CLI.
When:  Loaded once at module import time.

Environment variables:
    HOST          Address to bind and advertise. Unset → auto-detected.
    PORT          Listening port (default 8083).
    APP_ENV       Free-form environment name reported by /server-info.
    LOG_LEVEL     DEBUG, INFO, WARNING, ERROR, CRITICAL.
    CORS_ORIGINS  Comma-separated list of allowed origins ("*" by default).
    STATIC_ROOT   Directory served for GET / and unmatched GET paths.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Bundled front end (restFront.html and its assets)
DEFAULT_STATIC_ROOT = Path(__file__).resolve().parent / "static"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for running on a developer machine;
    none are required.
    """

    # ── Server ────────────────────────────────────────────────────────────
    # What: Bind/advertise address. None means "detect from network interfaces"
    host: Optional[str] = Field(default=None)
    port: int = Field(default=8083, ge=1, le=65535)

    app_env: str = Field(default="development")

    # ── Static content ────────────────────────────────────────────────────
    static_root: str = Field(default=str(DEFAULT_STATIC_ROOT))

    # ── CORS ──────────────────────────────────────────────────────────────
    # The bundled page calls the API on its own origin; other origins are
    # allowed so the page can also be opened from a separate dev server.
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Logging ───────────────────────────────────────────────────────────
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

    @field_validator("host")
    @classmethod
    def blank_host_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """HOST= (empty) behaves like an unset variable."""
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()
