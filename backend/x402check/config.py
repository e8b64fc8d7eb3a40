"""Environment-driven settings for the HTTP service."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

load_dotenv()

LOGGER = logging.getLogger(__name__)

DEFAULT_CORS: List[str] = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {raw!r}")


@dataclass(frozen=True)
class Settings:
    strict_default: bool = False
    log_level: str = "INFO"
    cors_allow_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS))


def load_settings() -> Settings:
    """Build settings from the process environment (and a .env file, if present)."""
    env_origins = os.getenv("CORS_ALLOW_ORIGINS")
    origins = list(DEFAULT_CORS)
    if env_origins:
        parsed = [origin.strip() for origin in env_origins.split(",") if origin.strip()]
        if parsed:
            origins = parsed

    settings = Settings(
        strict_default=_env_bool("X402CHECK_STRICT", False),
        log_level=os.getenv("X402CHECK_LOG_LEVEL", "INFO").upper(),
        cors_allow_origins=origins,
    )
    LOGGER.debug("Loaded settings: %s", settings)
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached process-wide settings."""
    return load_settings()


__all__ = ["Settings", "get_settings", "load_settings"]
