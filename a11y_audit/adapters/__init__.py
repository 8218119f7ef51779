"""Adapters for external systems integration."""

from .playwright_adapter import BrowserSession, PlaywrightAdapter

__all__ = [
    "BrowserSession",
    "PlaywrightAdapter",
]
