"""
config.py
Runtime settings (database path, storage key, plan mode, currency) with env overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DB_FILE = Path(__file__).with_name("subscriptions.db")
DEFAULT_STORAGE_KEY = "sub_customers"
DEFAULT_CURRENCY = "৳"

_FALSEY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    db_path: Path
    storage_key: str
    strict_plans: bool
    currency: str
    log_level: str
    expiry_window_days: int


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in _FALSEY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_settings() -> Settings:
    """Read settings from the environment, falling back to defaults."""
    return Settings(
        db_path=Path(os.getenv("SUBMGR_DB_PATH", DEFAULT_DB_FILE)),
        storage_key=os.getenv("SUBMGR_STORAGE_KEY", DEFAULT_STORAGE_KEY),
        strict_plans=_env_flag("SUBMGR_STRICT_PLANS", True),
        currency=os.getenv("SUBMGR_CURRENCY", DEFAULT_CURRENCY),
        log_level=os.getenv("SUBMGR_LOG_LEVEL", "INFO").upper(),
        expiry_window_days=_env_int("SUBMGR_EXPIRY_WINDOW_DAYS", 7),
    )
