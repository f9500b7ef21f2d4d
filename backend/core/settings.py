from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_FEED_URL = (
    "https://docs.google.com/spreadsheets/d/1Xz7VJdOsAM1RflWBET1q08GU0RMImx6HO2hsBFzExx4/export?format=csv"
)
DEFAULT_STORAGE_KEY = "sial-dashboard-data"
DEFAULT_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


@dataclass
class Settings:
    feed_url: str = DEFAULT_FEED_URL
    poll_interval: float = 30.0
    poll_enabled: bool = True
    feed_timeout: float | None = None
    reset_on_start: bool = True
    storage_dir: Path | None = None
    storage_key: str = DEFAULT_STORAGE_KEY
    people: list[str] = field(default_factory=lambda: ["abdullah", "ayesha"])
    chat_relay_url: str | None = None
    chat_relay_timeout: float | None = None
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_ORIGINS))


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _float_env(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _list_env(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name, "")
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or list(default)


def load_settings() -> Settings:
    """Read service settings from the environment."""

    storage_dir = os.getenv("HISTORY_STORAGE_DIR")
    return Settings(
        feed_url=os.getenv("FEED_URL") or DEFAULT_FEED_URL,
        poll_interval=_float_env("FEED_POLL_INTERVAL", 30.0) or 30.0,
        poll_enabled=_bool_env("FEED_POLL_ENABLED", True),
        feed_timeout=_float_env("FEED_TIMEOUT", None),
        reset_on_start=_bool_env("HISTORY_RESET_ON_START", True),
        storage_dir=Path(storage_dir).expanduser().resolve() if storage_dir else None,
        storage_key=os.getenv("HISTORY_STORAGE_KEY") or DEFAULT_STORAGE_KEY,
        people=_list_env("DASHBOARD_PEOPLE", ["abdullah", "ayesha"]),
        chat_relay_url=os.getenv("CHAT_RELAY_URL") or None,
        chat_relay_timeout=_float_env("CHAT_RELAY_TIMEOUT", None),
        cors_origins=_list_env("API_CORS_ORIGINS", DEFAULT_ORIGINS),
    )
