"""
Geometry helpers for Alien Orbit.

Angle normalisation, orbit positions and distances shared by the
entity models and the simulation step.
"""

from __future__ import annotations

import math

from alien_orbit.config import TAU


def normalize_angle(angle: float) -> float:
    """Wrap *angle* into ``[0, 2π)``."""
    wrapped = math.fmod(angle, TAU)
    if wrapped < 0:
        wrapped += TAU
    # fmod of a tiny negative value can round up to exactly TAU
    if wrapped >= TAU:
        wrapped = 0.0
    return wrapped


def point_on_circle(
    cx: float, cy: float, radius: float, angle: float
) -> tuple[float, float]:
    """Return the point at *angle* on the circle centred at (*cx*, *cy*)."""
    return (cx + radius * math.cos(angle), cy + radius * math.sin(angle))


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(x2 - x1, y2 - y1)


def circular_distance(a: float, b: float) -> float:
    """Shortest angular distance between *a* and *b*, in ``[0, π]``."""
    diff = abs(normalize_angle(a) - normalize_angle(b))
    return min(diff, TAU - diff)


def orbit_radius(width: float, height: float, ratio: float) -> float:
    """Orbit radius for a playfield: *ratio* of the shorter side, halved."""
    return min(width, height) * ratio / 2
