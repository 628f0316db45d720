"""Utility functions and helpers."""

from .geometry import (
    circular_distance,
    distance,
    normalize_angle,
    orbit_radius,
    point_on_circle,
)
from .input_handler import GameAction, InputEvent, InputRouter

__all__ = [
    "circular_distance",
    "distance",
    "normalize_angle",
    "orbit_radius",
    "point_on_circle",
    "GameAction",
    "InputEvent",
    "InputRouter",
]
