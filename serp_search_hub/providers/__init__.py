"""Providers package."""

from .serper import SerperProvider

__all__ = ["SerperProvider"]
