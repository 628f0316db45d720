"""
Fireball model for Alien Orbit.

Fireballs travel in a straight line from the alien and are pruned once
they are completely off the playfield.  ``FireballManager`` owns the
session-wide collection.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from alien_orbit.config import FIREBALL_MARGIN


@dataclass
class Fireball:
    """A single projectile.

    ``age`` counts ticks since launch.  ``hit_radius`` is half the
    configured fireball size at launch time.
    """

    x: float
    y: float
    travel_angle: float
    speed: float
    hit_radius: float
    age: int = 0

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def update(self) -> None:
        """Move one tick along the travel angle."""
        self.x += math.cos(self.travel_angle) * self.speed
        self.y += math.sin(self.travel_angle) * self.speed
        self.age += 1

    def is_off_field(
        self, width: float, height: float, margin: float = FIREBALL_MARGIN
    ) -> bool:
        """Return True once the fireball is fully outside the playfield.

        The fireball must be further than ``hit_radius + margin``
        beyond an edge on at least one axis.
        """
        limit = self.hit_radius + margin
        return (
            self.x < -limit
            or self.x > width + limit
            or self.y < -limit
            or self.y > height + limit
        )


@dataclass
class FireballManager:
    """Session-wide fireball collection."""

    width: float
    height: float
    fireballs: list[Fireball] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.fireballs)

    def __iter__(self) -> Iterator[Fireball]:
        return iter(self.fireballs)

    @property
    def in_flight(self) -> int:
        return len(self.fireballs)

    @property
    def is_empty(self) -> bool:
        return not self.fireballs

    def spawn_volley(
        self,
        x: float,
        y: float,
        angles: Iterable[float],
        speed: float,
        size: float,
    ) -> list[Fireball]:
        """Launch one fireball per angle from (*x*, *y*)."""
        volley = [
            Fireball(x=x, y=y, travel_angle=a, speed=speed, hit_radius=size / 2)
            for a in angles
        ]
        self.fireballs.extend(volley)
        return volley

    def update_all(self) -> int:
        """Move every fireball and prune the ones that left the field.

        Returns the number of fireballs removed.
        """
        for fireball in self.fireballs:
            fireball.update()
        before = len(self.fireballs)
        self.fireballs = [
            f for f in self.fireballs
            if not f.is_off_field(self.width, self.height)
        ]
        return before - len(self.fireballs)

    def reset(self) -> None:
        self.fireballs = []
