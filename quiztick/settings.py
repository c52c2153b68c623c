"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/QuizTick/settings.json

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .errors import InvalidConfiguration
from .subjects import CustomSubject, Subject
from .timer.engine import MarkCueMode

logger = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "QuizTick"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── subject ───────────────────────────────────────────────────────
    subject: str = Subject.STANDARD_IB.value
    custom_title: str = ""
    custom_seconds_per_mark: int = 0

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100
    mark_cue_mode: str = "every_tick"      # or "boundary"

    def selected_subject(self) -> Subject:
        """The saved subject, or IB Standard if the stored name is stale."""
        try:
            return Subject.from_name(self.subject)
        except InvalidConfiguration:
            logger.warning("Unknown saved subject %r, using default", self.subject)
            return Subject.STANDARD_IB

    def cue_mode(self) -> MarkCueMode:
        try:
            return MarkCueMode(self.mark_cue_mode)
        except ValueError:
            logger.warning("Unknown saved cue mode %r, using default", self.mark_cue_mode)
            return MarkCueMode.EVERY_TICK

    def custom_subject(self) -> CustomSubject:
        return CustomSubject(
            title=self.custom_title,
            seconds_per_mark=self.custom_seconds_per_mark,
        )


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            # Only keys that exist in the dataclass, with the default's type
            defaults = Settings()
            filtered = {}
            for f in fields(Settings):
                if f.name not in data:
                    continue
                value = data[f.name]
                if _same_type(value, getattr(defaults, f.name)):
                    filtered[f.name] = value
                else:
                    logger.warning(
                        "Ignoring setting %s=%r (expected %s)",
                        f.name, value, type(getattr(defaults, f.name)).__name__,
                    )
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
    return Settings()


def _same_type(value: object, default: object) -> bool:
    # bool is an int subclass; keep the two apart
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(value, bool) and isinstance(default, bool)
    return isinstance(value, type(default))


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
