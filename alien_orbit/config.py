"""
Configuration constants and tunable settings for Alien Orbit.

Module-level constants fix the simulation cadence and the alien's
phase timings.  ``GameConfig`` holds the six player-tunable values
that are persisted between runs and changed through the settings
entry point.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Display / timing
# ---------------------------------------------------------------------------
SCREEN_WIDTH: int = 960
SCREEN_HEIGHT: int = 720
UPDATE_RATE: int = 60  # Hz – the shell drives one tick per frame
TICK_MS: int = 16      # simulated milliseconds per tick

TAU: float = 2 * math.pi

# ---------------------------------------------------------------------------
# Orbit
# ---------------------------------------------------------------------------
ORBIT_RATIO: float = 0.85  # orbit diameter as a share of the shorter side

# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------
MIN_PLAYERS: int = 1
MAX_PLAYERS: int = 2
PLAYER_HIT_RADIUS: float = 8.0
PLAYER_START_ANGLES: tuple[float, ...] = (0.0, math.pi)

# ---------------------------------------------------------------------------
# Alien state machine
# ---------------------------------------------------------------------------
ROTATION_PHASE_MIN_MS: int = 1000
ROTATION_PHASE_MAX_MS: int = 3000
STOPPING_DECAY: float = 0.95
STOPPED_SPEED_THRESHOLD: float = 0.001
AIMING_DURATION_MS: int = 1000
VOLLEY_SIZE: int = 3
VOLLEY_SPREAD: float = TAU / VOLLEY_SIZE

# ---------------------------------------------------------------------------
# Classic (cooldown) firing mode
# ---------------------------------------------------------------------------
CLASSIC_COOLDOWN_MS: int = 2000
CLASSIC_COOLDOWN_MIN_MS: int = 1000
CLASSIC_COOLDOWN_STEP_MS: int = 100
CLASSIC_COOLDOWN_SCORE_STEP: int = 5
CLASSIC_FIRST_DELAY_MIN_MS: int = 500
CLASSIC_FIRST_DELAY_MAX_MS: int = 1000

# ---------------------------------------------------------------------------
# Fireballs
# ---------------------------------------------------------------------------
FIREBALL_MARGIN: float = 10.0  # extra off-screen distance before pruning

# ---------------------------------------------------------------------------
# Transient UI timers
# ---------------------------------------------------------------------------
HIT_INDICATOR_MS: int = 500

# ---------------------------------------------------------------------------
# Persistence keys
# ---------------------------------------------------------------------------
CONFIG_KEY: str = "gameConfig"
HIGH_SCORE_KEY: str = "gameHighScore"
DEFAULT_SETTINGS_FILE: str = "settings.json"


# ── Tunable settings ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GameConfig:
    """Player-tunable sizes and speeds.

    Sizes are diameters in screen units.  ``alien_rotation_speed`` and
    ``hero_speed`` are radians per tick; ``fireball_speed`` is screen
    units per tick.  Values are not range-checked.
    """

    alien_size: float = 180
    alien_rotation_speed: float = 0.01
    hero_size: float = 88
    hero_speed: float = 0.03
    fireball_size: float = 16
    fireball_speed: float = 3

    def to_nested(self) -> dict[str, dict[str, float]]:
        """Return the persisted ``{"alien": {...}, ...}`` layout."""
        return {
            "alien": {
                "size": self.alien_size,
                "rotationSpeed": self.alien_rotation_speed,
            },
            "hero": {"size": self.hero_size, "speed": self.hero_speed},
            "fireball": {
                "size": self.fireball_size,
                "speed": self.fireball_speed,
            },
        }


DEFAULT_CONFIG = GameConfig()

# External (camelCase) setting names mapped onto GameConfig fields.
SETTING_FIELDS: dict[str, str] = {
    "alienSize": "alien_size",
    "alienRotationSpeed": "alien_rotation_speed",
    "heroSize": "hero_size",
    "heroSpeed": "hero_speed",
    "fireballSize": "fireball_size",
    "fireballSpeed": "fireball_speed",
}

# Nested persisted layout: (group, key) -> field
_NESTED_FIELDS: dict[tuple[str, str], str] = {
    ("alien", "size"): "alien_size",
    ("alien", "rotationSpeed"): "alien_rotation_speed",
    ("hero", "size"): "hero_size",
    ("hero", "speed"): "hero_speed",
    ("fireball", "size"): "fireball_size",
    ("fireball", "speed"): "fireball_speed",
}

_FIELD_NAMES = frozenset(f.name for f in fields(GameConfig))


def _coerce(value: Any) -> float | None:
    """Return *value* as a finite float, or None if it is not numeric."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def flatten_settings(overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Normalise a settings mapping to ``{field_name: raw_value}``.

    Accepts the flat camelCase keys (``heroSpeed``), the nested
    persisted form (``{"hero": {"speed": ...}}``) and plain field
    names (``hero_speed``), in any mix.  Unknown keys are logged and
    dropped.
    """
    flat: dict[str, Any] = {}
    for key, value in overrides.items():
        if key in SETTING_FIELDS:
            flat[SETTING_FIELDS[key]] = value
        elif key in _FIELD_NAMES:
            flat[key] = value
        elif isinstance(value, Mapping):
            for sub_key, sub_value in value.items():
                name = _NESTED_FIELDS.get((key, sub_key))
                if name is None:
                    logger.warning("Ignoring unknown setting %s.%s", key, sub_key)
                    continue
                flat[name] = sub_value
        else:
            logger.warning("Ignoring unknown setting %s", key)
    return flat


def merge_config(base: GameConfig, overrides: Mapping[str, Any]) -> GameConfig:
    """Return *base* with *overrides* applied.

    Precedence is override > base, field by field.  An override that is
    not a number keeps the base value for that field; numeric values
    are taken as-is, including negative or zero ones.
    """
    changes: dict[str, float] = {}
    for name, raw in flatten_settings(overrides).items():
        number = _coerce(raw)
        if number is None:
            logger.warning("Ignoring non-numeric value %r for %s", raw, name)
            continue
        changes[name] = number
    if not changes:
        return base
    return replace(base, **changes)
