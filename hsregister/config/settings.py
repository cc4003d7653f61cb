"""
Configuration Management for HSRegister

Uses pydantic-settings for type-safe configuration from environment
variables (prefix HSR_) and an optional .env file.

Command-line options describe one invocation; these settings describe
the installation (where the ledger lives, how noisy the log is).
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_NAME = "HSRegister"
VERSION = "0.1"
VERSION_STRING = f"{APP_NAME} - Banking Register: Version {VERSION}"

DEFAULT_DB_LOCATION = "~/.hsr.db"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class Settings(BaseSettings):
    """
    Application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="HSR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    db_path: Path = Field(
        default_factory=lambda: Path(DEFAULT_DB_LOCATION).expanduser(),
        description="Location of the ledger database file"
    )
    log_level: str = Field(
        default="WARNING",
        description="Minimum level written to the structured log"
    )
    log_json: bool = Field(
        default=False,
        description="Render log lines as JSON instead of key=value"
    )
    strict_parsing: bool = Field(
        default=False,
        description="Reject malformed --amount/--check values instead of ignoring them"
    )

    @field_validator("db_path")
    @classmethod
    def expand_db_path(cls, v: Path) -> Path:
        """Expand a leading ~ so the store lands in the user's home."""
        return v.expanduser()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
