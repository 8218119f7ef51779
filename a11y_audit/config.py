"""Configuration management for a11y-audit."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """a11y-audit configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: str = Field(default="dev", description="Environment: dev, prod")

    # Remote browser service
    browserless_api_key: Optional[str] = Field(
        default=None,
        description="Browserless.io API key used to reach the remote browser"
    )
    browserless_endpoint: str = Field(
        default="wss://chrome.browserless.io",
        description="Browserless CDP websocket endpoint"
    )
    allow_local_browser: bool = Field(
        default=False,
        description="Launch a local headless Chromium when no API key is configured"
    )
    connect_attempts: int = Field(
        default=2,
        description="Attempts made to connect to the browser service"
    )

    # Scan defaults
    max_pages: int = Field(default=3, description="Maximum pages scanned per audit")
    page_timeout_ms: int = Field(
        default=25000,
        description="Navigation timeout per page in milliseconds"
    )
    settle_delay_ms: int = Field(
        default=1000,
        description="Delay after DOM content loaded before running the rule engine"
    )
    axe_ready_timeout_ms: int = Field(
        default=5000,
        description="How long to wait for axe-core to become available in the page"
    )

    # Rule engine
    axe_script_url: str = Field(
        default="https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.8.4/axe.min.js",
        description="URL axe-core is injected from"
    )
    axe_script_path: Optional[Path] = Field(
        default=None,
        description="Local axe.min.js to inject instead of the CDN script"
    )

    # Browser context
    viewport_width: int = Field(default=1280, description="Viewport width in pixels")
    viewport_height: int = Field(default=720, description="Viewport height in pixels")
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 LukeUX-A11y-Audit/1.0"
        ),
        description="User agent sent by the scanning browser"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="json",
        description="Log format: json, console"
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (for testing)."""
    global _settings
    _settings = None
