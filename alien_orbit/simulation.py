"""
Fixed-timestep simulation for Alien Orbit.

``World`` bundles the physical state of one session (alien, players,
fireballs and the transient hit indicator).  ``step`` advances it by
exactly one tick in a fixed order:

1. alien state machine (plus volley spawn and scoring)
2. players
3. fireballs (move, then prune)
4. collisions against post-move positions
5. transient UI timers

Run/pause/cheat flags live in the session; ``step`` only receives
``cheat_mode`` because it changes what a collision means.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from alien_orbit.config import (
    HIT_INDICATOR_MS,
    ORBIT_RATIO,
    TICK_MS,
    GameConfig,
)
from alien_orbit.models.alien import Alien
from alien_orbit.models.fireball import FireballManager
from alien_orbit.models.player import Player
from alien_orbit.utils.geometry import distance, orbit_radius

logger = logging.getLogger(__name__)


# ── Transient timers ────────────────────────────────────────────────────────


@dataclass
class HitIndicator:
    """Cheat-mode "HIT" flag that clears after a fixed window."""

    active: bool = False
    elapsed_ms: int = 0
    duration_ms: int = HIT_INDICATOR_MS

    def trigger(self) -> None:
        self.active = True
        self.elapsed_ms = 0

    def age(self, dt_ms: int) -> None:
        if not self.active:
            return
        self.elapsed_ms += dt_ms
        if self.elapsed_ms >= self.duration_ms:
            self.active = False
            self.elapsed_ms = 0


# ── World ───────────────────────────────────────────────────────────────────


@dataclass
class World:
    """Physical state of a session."""

    width: float
    height: float
    config: GameConfig
    alien: Alien
    players: list[Player]
    fireballs: FireballManager
    hit_indicator: HitIndicator = field(default_factory=HitIndicator)
    tick_count: int = 0

    @property
    def center_x(self) -> float:
        return self.width / 2

    @property
    def center_y(self) -> float:
        return self.height / 2

    @property
    def orbit_radius(self) -> float:
        return orbit_radius(self.width, self.height, ORBIT_RATIO)

    @property
    def best_score(self) -> int:
        return max((p.score for p in self.players), default=0)

    def player_position(self, player: Player) -> tuple[float, float]:
        return player.position(self.center_x, self.center_y, self.orbit_radius)


@dataclass
class StepResult:
    """What happened during one tick."""

    volley: tuple[float, ...] = ()
    scored: bool = False
    hit_players: list[int] = field(default_factory=list)
    lethal: bool = False


# ── Rules ───────────────────────────────────────────────────────────────────


def award_volley_points(players: list[Player]) -> bool:
    """Give +1 to every alive player.  Returns True if anyone scored."""
    scored = False
    for player in players:
        if player.alive:
            player.score += 1
            scored = True
    return scored


def find_collisions(world: World) -> list[Player]:
    """Return alive players touched by any fireball."""
    hit: list[Player] = []
    for player in world.players:
        if not player.alive:
            continue
        px, py = world.player_position(player)
        for fireball in world.fireballs:
            d = distance(px, py, fireball.x, fireball.y)
            if d < player.hit_radius + fireball.hit_radius:
                hit.append(player)
                break
    return hit


# ── Step ────────────────────────────────────────────────────────────────────


def step(world: World, cheat_mode: bool, dt_ms: int = TICK_MS) -> StepResult:
    """Advance *world* by one tick of *dt_ms* simulated milliseconds."""
    result = StepResult()
    alien = world.alien
    config = world.config

    # 1. Alien; a volley is scored before it is spawned
    angles = alien.update(dt_ms, world.fireballs.in_flight)
    if angles is not None:
        result.volley = angles
        if not cheat_mode and alien.volley_scores(world.fireballs.in_flight):
            result.scored = award_volley_points(world.players)
            if result.scored:
                alien.on_score(world.best_score)
                logger.debug("Volley survived, best score %d", world.best_score)
        world.fireballs.spawn_volley(
            alien.x, alien.y, angles,
            config.fireball_speed, config.fireball_size,
        )

    # 2. Players
    for player in world.players:
        player.update()

    # 3. Fireballs
    world.fireballs.update_all()

    # 4. Collisions
    hit_now = False
    for player in find_collisions(world):
        result.hit_players.append(player.player_id)
        if cheat_mode:
            world.hit_indicator.trigger()
            hit_now = True
        else:
            player.kill()
            result.lethal = True

    # 5. Transient timers (a fresh hit starts aging next tick)
    if not hit_now:
        world.hit_indicator.age(dt_ms)

    world.tick_count += 1
    return result
