"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Calm/settings.json

Usage::

    settings = load_settings()
    settings.interval = 20 * 60 * 1000
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.engine import DEFAULT_INTERVAL

LOGGER = logging.getLogger(__name__)

# Reuse the app-support directory from db.py
APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Calm"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    interval: int = DEFAULT_INTERVAL       # milliseconds

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 420
    window_height: int = 560


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        settings = Settings(**{k: v for k, v in data.items() if k in valid_keys})
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        LOGGER.warning("ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
        return Settings()

    defaults = Settings()
    for f in fields(Settings):
        value = getattr(settings, f.name)
        default = getattr(defaults, f.name)
        # bool is an int subclass, so compare exact types
        if type(value) is not type(default):
            LOGGER.warning("stored %s %r is invalid, using default", f.name, value)
            setattr(settings, f.name, default)

    if settings.interval <= 0:
        LOGGER.warning("stored interval %r is invalid, using default", settings.interval)
        settings.interval = DEFAULT_INTERVAL
    return settings


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
