"""Centralized configuration loading.

Settings come from environment variables, optionally read from a ``.env``
file next to the app. Call ``get_settings()`` wherever a value is needed.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


# Load .env once at import time
load_dotenv()

DEFAULT_API_BASE = "https://botw-compendium.herokuapp.com/api/v3/compendium"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass
class Settings:
    # Compendium API
    api_base: str = field(
        default_factory=lambda: os.getenv("COMPENDIUM_API_BASE", DEFAULT_API_BASE).rstrip("/")
    )
    request_timeout: float = field(default_factory=lambda: _env_float("COMPENDIUM_TIMEOUT", 10.0))

    # Navigation
    max_history: int = field(default_factory=lambda: _env_int("COMPENDIUM_MAX_HISTORY", 64))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("COMPENDIUM_LOG_LEVEL", "INFO").upper())


def get_settings() -> Settings:
    """Return a new Settings instance (cheap dataclass construction)."""
    return Settings()
