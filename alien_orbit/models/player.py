"""
Player model for Alien Orbit.

A player rides the orbit at a fixed angular speed and reverses
direction on input.  Players are never removed mid-session; a lethal
hit only marks them as no longer alive.
"""

from __future__ import annotations

from dataclasses import dataclass

from alien_orbit.config import (
    MAX_PLAYERS,
    MIN_PLAYERS,
    PLAYER_HIT_RADIUS,
    PLAYER_START_ANGLES,
)
from alien_orbit.utils.geometry import normalize_angle, point_on_circle


@dataclass
class Player:
    """One orbiting hero.

    Properties:
        player_id: 1-based player number
        angle: position on the orbit in radians, kept in [0, 2π)
        angular_speed: radians advanced per tick
        direction: +1 or -1
    """

    player_id: int
    angle: float = 0.0
    angular_speed: float = 0.03
    hit_radius: float = PLAYER_HIT_RADIUS
    direction: int = 1
    score: int = 0
    alive: bool = True

    def __post_init__(self) -> None:
        self.angle = normalize_angle(self.angle)

    def update(self) -> None:
        """Advance one tick along the orbit."""
        if not self.alive:
            return
        self.angle = normalize_angle(
            self.angle + self.angular_speed * self.direction
        )

    def flip(self) -> bool:
        """Reverse direction.  Returns False if the player is dead."""
        if not self.alive:
            return False
        self.direction = -self.direction
        return True

    def position(
        self, cx: float, cy: float, orbit_radius: float
    ) -> tuple[float, float]:
        return point_on_circle(cx, cy, orbit_radius, self.angle)

    def kill(self) -> None:
        self.alive = False


def create_players(count: int, angular_speed: float) -> list[Player]:
    """Create *count* players (clamped to 1-2) at their start angles."""
    count = max(MIN_PLAYERS, min(MAX_PLAYERS, count))
    return [
        Player(
            player_id=i + 1,
            angle=PLAYER_START_ANGLES[i],
            angular_speed=angular_speed,
        )
        for i in range(count)
    ]
