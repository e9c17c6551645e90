"""Configuration module."""

from billwise.config.logging import configure_logging, get_logger
from billwise.config.settings import (
    APISettings,
    BillingSettings,
    Settings,
    StorageSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "StorageSettings",
    "APISettings",
    "BillingSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
