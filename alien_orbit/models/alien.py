"""
Alien model and behaviour state machine for Alien Orbit.

The alien sits at the orbit centre and cycles forever through four
phases:

- Rotating: spin at base speed for a random 1-3 s
- Stopping: decay the spin exponentially until it is effectively zero
- Aiming:   telegraph the three impact angles for 1 s
- Firing:   hold still until every fireball has left the field

Each phase is its own small dataclass carrying only the fields it
needs; the alien holds exactly one of them.  The alien decides *when*
to fire and *where*; spawning and scoring belong to the simulation
step.

``ClassicAlien`` reproduces the simpler cooldown-driven variant: a
constant spin with a volley every couple of seconds.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union

from alien_orbit.config import (
    AIMING_DURATION_MS,
    CLASSIC_COOLDOWN_MIN_MS,
    CLASSIC_COOLDOWN_MS,
    CLASSIC_COOLDOWN_SCORE_STEP,
    CLASSIC_COOLDOWN_STEP_MS,
    CLASSIC_FIRST_DELAY_MAX_MS,
    CLASSIC_FIRST_DELAY_MIN_MS,
    ROTATION_PHASE_MAX_MS,
    ROTATION_PHASE_MIN_MS,
    STOPPED_SPEED_THRESHOLD,
    STOPPING_DECAY,
    VOLLEY_SIZE,
    VOLLEY_SPREAD,
)
from alien_orbit.utils.geometry import normalize_angle

logger = logging.getLogger(__name__)


class AlienState(Enum):
    ROTATING = auto()
    STOPPING = auto()
    AIMING = auto()
    FIRING = auto()


# Legal transitions; the cycle has no terminal state.
NEXT_STATE: dict[AlienState, AlienState] = {
    AlienState.ROTATING: AlienState.STOPPING,
    AlienState.STOPPING: AlienState.AIMING,
    AlienState.AIMING: AlienState.FIRING,
    AlienState.FIRING: AlienState.ROTATING,
}


# ── Phases ──────────────────────────────────────────────────────────────────


@dataclass
class Rotating:
    duration_ms: int
    elapsed_ms: int = 0

    state = AlienState.ROTATING


@dataclass
class Stopping:
    state = AlienState.STOPPING


@dataclass
class Aiming:
    target_angles: tuple[float, ...]
    elapsed_ms: int = 0

    state = AlienState.AIMING


@dataclass
class Firing:
    state = AlienState.FIRING


Phase = Union[Rotating, Stopping, Aiming, Firing]


def volley_angles(start: float, count: int = VOLLEY_SIZE) -> tuple[float, ...]:
    """Return *count* angles evenly spread from *start*, normalised."""
    return tuple(
        normalize_angle(start + i * VOLLEY_SPREAD) for i in range(count)
    )


# ── Alien ───────────────────────────────────────────────────────────────────


@dataclass
class Alien:
    """The central enemy.

    ``update`` advances the state machine by one tick and returns the
    volley angles on the tick the aim window expires, otherwise None.
    """

    x: float
    y: float
    radius: float
    base_rotation_speed: float
    rng: random.Random = field(default_factory=random.Random, repr=False)
    rotation_angle: float = 0.0
    rotation_speed: float = 0.0
    phase: Optional[Phase] = None

    def __post_init__(self) -> None:
        self.rotation_angle = normalize_angle(self.rotation_angle)
        if self.phase is None:
            self._enter_rotating()

    # Queries ─────────────────────────────────────────────────────────────

    @property
    def state(self) -> AlienState:
        return self.phase.state

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def phase_elapsed(self) -> int:
        return getattr(self.phase, "elapsed_ms", 0)

    @property
    def rotation_phase_duration(self) -> int:
        return getattr(self.phase, "duration_ms", 0)

    @property
    def target_angles(self) -> tuple[float, ...]:
        if isinstance(self.phase, Aiming):
            return self.phase.target_angles
        return ()

    @property
    def show_telegraph(self) -> bool:
        return isinstance(self.phase, Aiming)

    # Settings ────────────────────────────────────────────────────────────

    def set_base_rotation_speed(self, speed: float) -> None:
        """Change the base spin; takes effect at once while rotating."""
        self.base_rotation_speed = speed
        if isinstance(self.phase, Rotating):
            self.rotation_speed = speed

    # Transitions ─────────────────────────────────────────────────────────

    def _enter_rotating(self) -> None:
        self.rotation_speed = self.base_rotation_speed
        duration = self.rng.randint(ROTATION_PHASE_MIN_MS, ROTATION_PHASE_MAX_MS)
        self.phase = Rotating(duration_ms=duration)
        logger.debug("Alien rotating for %d ms", duration)

    def _enter_stopping(self) -> None:
        self.phase = Stopping()
        logger.debug("Alien stopping at angle %.4f", self.rotation_angle)

    def _enter_aiming(self) -> None:
        self.rotation_speed = 0.0
        targets = volley_angles(self.rotation_angle)
        self.phase = Aiming(target_angles=targets)
        logger.debug("Alien aiming at %s", ", ".join(f"{a:.4f}" for a in targets))

    def _enter_firing(self) -> None:
        self.phase = Firing()
        logger.debug("Alien firing")

    def _advance(self) -> None:
        """Enter the phase that follows the current one."""
        enter = {
            AlienState.ROTATING: self._enter_rotating,
            AlienState.STOPPING: self._enter_stopping,
            AlienState.AIMING: self._enter_aiming,
            AlienState.FIRING: self._enter_firing,
        }
        enter[NEXT_STATE[self.state]]()

    def _rotate(self, speed: float) -> None:
        self.rotation_angle = normalize_angle(self.rotation_angle + speed)

    # Per-tick update ─────────────────────────────────────────────────────

    def update(
        self, dt_ms: int, fireballs_in_flight: int
    ) -> Optional[tuple[float, ...]]:
        """Advance one tick.

        *fireballs_in_flight* is the size of the fireball collection at
        the start of the tick; the Firing phase waits for it to reach
        zero.
        """
        phase = self.phase

        if isinstance(phase, Rotating):
            self._rotate(self.rotation_speed)
            phase.elapsed_ms += dt_ms
            if phase.elapsed_ms >= phase.duration_ms:
                self._advance()

        elif isinstance(phase, Stopping):
            self.rotation_speed *= STOPPING_DECAY
            if abs(self.rotation_speed) < STOPPED_SPEED_THRESHOLD:
                self._advance()
            else:
                self._rotate(self.rotation_speed)

        elif isinstance(phase, Aiming):
            phase.elapsed_ms += dt_ms
            if phase.elapsed_ms >= AIMING_DURATION_MS:
                targets = phase.target_angles
                self._advance()
                return targets

        elif isinstance(phase, Firing):
            if fireballs_in_flight == 0:
                self._advance()

        return None

    def volley_scores(self, fireballs_in_flight: int) -> bool:
        """A volley only pays out if the field was clear when it fired."""
        return fireballs_in_flight == 0

    def on_score(self, best_score: int) -> None:
        """Hook for score-driven difficulty; the telegraphing alien has none."""


# ── Classic (cooldown) alien ────────────────────────────────────────────────


@dataclass
class ClassicAlien(Alien):
    """Cooldown-driven alien from the simplest game variant.

    Spins at a constant speed and fires whenever the time since the
    last volley exceeds the cooldown.  The first volley waits an extra
    500-1000 ms.  The reported state is always ROTATING.  Every volley
    scores for the wave before it, whether or not that wave has left
    the field.

    The Rotating phase doubles as the volley timer: ``elapsed_ms`` is
    the time since the last volley and ``duration_ms`` the current
    wait.
    """

    cooldown_ms: int = CLASSIC_COOLDOWN_MS

    def _enter_rotating(self) -> None:
        self.rotation_speed = self.base_rotation_speed
        first_delay = self.rng.randint(
            CLASSIC_FIRST_DELAY_MIN_MS, CLASSIC_FIRST_DELAY_MAX_MS
        )
        self.phase = Rotating(duration_ms=self.cooldown_ms + first_delay)

    def set_base_rotation_speed(self, speed: float) -> None:
        self.base_rotation_speed = speed
        self.rotation_speed = speed

    def update(
        self, dt_ms: int, fireballs_in_flight: int
    ) -> Optional[tuple[float, ...]]:
        phase = self.phase
        self._rotate(self.rotation_speed)
        phase.elapsed_ms += dt_ms
        if phase.elapsed_ms > phase.duration_ms:
            self.phase = Rotating(duration_ms=self.cooldown_ms)
            logger.debug("Classic volley, next in %d ms", self.cooldown_ms)
            return volley_angles(self.rotation_angle)
        return None

    def volley_scores(self, fireballs_in_flight: int) -> bool:
        """Each volley pays for surviving the previous one, in flight or not."""
        return True

    def on_score(self, best_score: int) -> None:
        """Shorten the cooldown each time the best score hits a multiple of 5."""
        if best_score > 0 and best_score % CLASSIC_COOLDOWN_SCORE_STEP == 0:
            self.cooldown_ms = max(
                CLASSIC_COOLDOWN_MIN_MS,
                self.cooldown_ms - CLASSIC_COOLDOWN_STEP_MS,
            )
            logger.debug("Classic cooldown now %d ms", self.cooldown_ms)
