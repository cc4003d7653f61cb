"""Configuration package."""

from hsregister.config.settings import (
    APP_NAME,
    DEFAULT_DB_LOCATION,
    TIME_FORMAT,
    VERSION,
    VERSION_STRING,
    Settings,
    get_settings,
)

__all__ = [
    "APP_NAME",
    "DEFAULT_DB_LOCATION",
    "TIME_FORMAT",
    "VERSION",
    "VERSION_STRING",
    "Settings",
    "get_settings",
]
