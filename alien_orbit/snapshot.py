"""
Read-only render views for Alien Orbit.

A ``GameSnapshot`` is built after each tick and handed to the
renderer.  Every view is frozen and holds tuples only, so a renderer
cannot reach back into live session state.
"""

from __future__ import annotations

from dataclasses import dataclass

from alien_orbit.models.alien import AlienState


@dataclass(frozen=True)
class AlienView:
    x: float
    y: float
    radius: float
    rotation_angle: float
    rotation_speed: float
    state: AlienState
    phase_elapsed: int
    show_telegraph: bool
    target_angles: tuple[float, ...]
    telegraph_points: tuple[tuple[float, float], ...]


@dataclass(frozen=True)
class PlayerView:
    player_id: int
    angle: float
    x: float
    y: float
    hit_radius: float
    direction: int
    score: int
    alive: bool


@dataclass(frozen=True)
class FireballView:
    x: float
    y: float
    travel_angle: float
    hit_radius: float


@dataclass(frozen=True)
class GameSnapshot:
    """Everything the renderer and HUD need for one frame."""

    width: float
    height: float
    center_x: float
    center_y: float
    orbit_radius: float
    alien: AlienView
    players: tuple[PlayerView, ...]
    fireballs: tuple[FireballView, ...]
    running: bool
    paused: bool
    cheat_mode: bool
    show_hit_indicator: bool
    high_score: int
    tick_count: int

    @property
    def game_over(self) -> bool:
        return not self.running

    @property
    def best_score(self) -> int:
        return max((p.score for p in self.players), default=0)
