# config.py

"""Application configuration utilities.

Values are primarily loaded from ``config.json`` and may be overridden by
environment variables. The :func:`get_settings` helper merges the two sources
and caches the result.
"""

from __future__ import annotations

import json
import os
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class DispatchProvider(str, Enum):
    """Select how accepted delivery orders reach the courier service.

    ``HTTP`` posts to ``delivery_dispatch_url``; ``STUB`` only logs and
    records the request, which is the default for local runs.
    """

    HTTP = "http"
    STUB = "stub"


class Settings(BaseSettings):
    """Application settings merged from JSON and environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str | None = None
    dispatch_provider: DispatchProvider = DispatchProvider.STUB
    delivery_dispatch_url: str = "http://localhost:9000/api/delivery"
    delivery_dispatch_timeout: float = 5.0
    log_level: str = "INFO"
    slow_query_ms: int = 200


# Cached singleton to avoid repeated file reads
@lru_cache
def get_settings() -> Settings:
    """Return merged settings with environment variable precedence.

    The configuration is read from ``config.json`` located alongside this file
    and fed into :class:`Settings`. Environment variables override any values
    from the JSON file. The result is cached to prevent repeated disk reads.
    """

    config_path = Path(__file__).with_name("config.json")
    data = json.loads(config_path.read_text()) if config_path.exists() else {}
    env_override = {
        k.lower(): v
        for k, v in os.environ.items()
        if k.lower() in Settings.model_fields
    }
    merged = {**data, **env_override}
    # Environment variables override values from the JSON file.
    return Settings(**merged)
