"""User interface components."""

from .settings_store import JsonFileBackend, MemoryBackend, SettingsStore
from .text import ScoreDisplay, status_banners

__all__ = [
    "JsonFileBackend",
    "MemoryBackend",
    "ScoreDisplay",
    "SettingsStore",
    "status_banners",
]
