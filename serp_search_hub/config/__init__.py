"""Configuration management module."""

from .settings import (
    DEFAULT_SERPER_ENDPOINT,
    AppSettings,
    RewriterSettings,
    SerperSettings,
    get_settings,
)

__all__ = [
    "DEFAULT_SERPER_ENDPOINT",
    "AppSettings",
    "RewriterSettings",
    "SerperSettings",
    "get_settings",
]
