"""
Settings and high-score persistence for Alien Orbit.

The session reads two values from a key-value store at start-up (the
tunable ``GameConfig`` and an integer high score) and writes them back
when they change.  Persistence is best-effort: unreadable or malformed
entries fall back to defaults and write failures are logged, never
raised.

Layout, one JSON object per file::

    {
        "gameConfig": "{\\"alien\\": {\\"size\\": 180, ...}, ...}",
        "gameHighScore": "12"
    }

Values are stored as strings, matching a browser-style local store.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Union

from alien_orbit.config import (
    CONFIG_KEY,
    DEFAULT_CONFIG,
    DEFAULT_SETTINGS_FILE,
    HIGH_SCORE_KEY,
    GameConfig,
    merge_config,
)

logger = logging.getLogger(__name__)


# ── Backends ────────────────────────────────────────────────────────────────


@dataclass
class MemoryBackend:
    """In-process key-value store."""

    data: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


@dataclass
class JsonFileBackend:
    """Key-value store kept as a single JSON object on disk.

    ``get`` and ``set`` raise ``OSError`` or ``ValueError`` on I/O or
    parse problems; ``SettingsStore`` turns those into defaults.
    """

    filepath: str = DEFAULT_SETTINGS_FILE

    def _read(self) -> dict[str, str]:
        if not os.path.isfile(self.filepath):
            return {}
        with open(self.filepath, "r") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{self.filepath} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except ValueError:
            logger.warning("Overwriting malformed settings file %s", self.filepath)
            data = {}
        data[key] = value
        with open(self.filepath, "w") as fh:
            json.dump(data, fh, indent=2)


Backend = Union[MemoryBackend, JsonFileBackend]


# ── Store ───────────────────────────────────────────────────────────────────


@dataclass
class SettingsStore:
    """Typed, fault-tolerant access to the persisted settings."""

    backend: Backend = field(default_factory=MemoryBackend)

    @classmethod
    def from_file(cls, filepath: str = DEFAULT_SETTINGS_FILE) -> "SettingsStore":
        return cls(backend=JsonFileBackend(filepath))

    def _get(self, key: str) -> Optional[str]:
        try:
            return self.backend.get(key)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s: %s", key, exc)
            return None

    def _set(self, key: str, value: str) -> bool:
        try:
            self.backend.set(key, value)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Could not save %s: %s", key, exc)
            return False
        return True

    # Config ──────────────────────────────────────────────────────────────

    def load_config(self) -> GameConfig:
        """Return the saved config merged over the defaults."""
        raw = self._get(CONFIG_KEY)
        if raw is None:
            return DEFAULT_CONFIG
        try:
            saved = json.loads(raw)
        except ValueError as exc:
            logger.warning("Ignoring malformed %s: %s", CONFIG_KEY, exc)
            return DEFAULT_CONFIG
        if not isinstance(saved, dict):
            logger.warning("Ignoring malformed %s: not an object", CONFIG_KEY)
            return DEFAULT_CONFIG
        return merge_config(DEFAULT_CONFIG, saved)

    def save_config(self, config: GameConfig) -> bool:
        return self._set(CONFIG_KEY, json.dumps(config.to_nested()))

    # High score ──────────────────────────────────────────────────────────

    def load_high_score(self) -> int:
        raw = self._get(HIGH_SCORE_KEY)
        if raw is None:
            return 0
        try:
            score = int(str(raw).strip())
        except ValueError:
            logger.warning("Ignoring malformed %s: %r", HIGH_SCORE_KEY, raw)
            return 0
        return max(score, 0)

    def save_high_score(self, score: int) -> bool:
        return self._set(HIGH_SCORE_KEY, str(int(score)))
