"""Environment-driven settings for potkit.

``PotSettings`` holds the few knobs a host application may want to set
without code changes: how logging renders, and how many automatic retries a
fetch gets when the reducer does not say.

Examples:
    >>> from potkit.core.settings import PotSettings
    >>> PotSettings(default_retries=5).default_retries
    5

    Environment override (``POT_`` prefix)::

        POT_DEFAULT_RETRIES=1 POT_LOG_LEVEL=DEBUG python app.py

Tags:
    settings, configuration, pydantic, environment, potkit
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PotSettings(BaseSettings):
    """Settings shared by the lifecycle helpers and logging setup.

    Fields
    ──────
    log_level       : structlog log level
    log_json        : JSON output; None means auto (JSON when not a tty)
    service         : Service name stamped on every log line
    default_retries : Retry budget for FetchStarted events without one
    """

    model_config = SettingsConfigDict(
        env_prefix="POT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None
    service: str = "potkit"

    # ── Lifecycle ────────────────────────────────────────────────
    default_retries: int = Field(
        default=3,
        ge=0,
        description="Retry budget used when a fetch starts without an explicit one",
    )


@lru_cache(maxsize=1)
def get_settings() -> PotSettings:
    """Process-wide settings, read once."""
    return PotSettings()


__all__ = ["PotSettings", "get_settings"]
