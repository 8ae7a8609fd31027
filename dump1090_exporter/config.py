"""Configuration settings for the dump1090 exporter."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Process configuration loaded from environment variables.

    Nothing here describes an upstream receiver: targets arrive with each
    scrape request.
    """

    env: str = os.getenv("DUMP1090_EXPORTER_ENV", "local")
    log_level: str = os.getenv("DUMP1090_EXPORTER_LOG_LEVEL", "INFO")
    listen_address: str = os.getenv("DUMP1090_EXPORTER_LISTEN_ADDRESS", ":9190")
    log_requests: bool = _get_bool("DUMP1090_EXPORTER_LOG_REQUESTS", default=True)


settings = Settings()

__all__ = ["settings", "Settings"]
