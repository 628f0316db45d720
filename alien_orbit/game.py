"""
Session controller for Alien Orbit.

``GameSession`` owns every piece of state for one run: the world, the
run/pause/cheat flags, the high score and the input router.  The shell
calls ``tick`` once per frame and reads ``snapshot`` to draw.

Sessions are built with ``create_session``, which loads the tunable
config and high score from a ``SettingsStore``.  Restarting a finished
game means building a fresh session.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from alien_orbit.config import (
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TICK_MS,
    GameConfig,
    merge_config,
)
from alien_orbit.models.alien import Alien, ClassicAlien
from alien_orbit.models.fireball import FireballManager
from alien_orbit.models.player import create_players
from alien_orbit.simulation import World, step
from alien_orbit.snapshot import AlienView, FireballView, GameSnapshot, PlayerView
from alien_orbit.ui.settings_store import SettingsStore
from alien_orbit.utils.geometry import point_on_circle
from alien_orbit.utils.input_handler import GameAction, InputEvent, InputRouter

logger = logging.getLogger(__name__)


class FiringMode(Enum):
    TELEGRAPH = "telegraph"
    CLASSIC = "classic"


# ── Session ─────────────────────────────────────────────────────────────────


@dataclass
class GameSession:
    """One run of the game, from first tick to game over."""

    world: World
    router: InputRouter
    store: SettingsStore = field(default_factory=SettingsStore)
    high_score: int = 0
    running: bool = True
    paused: bool = False
    cheat_mode: bool = False
    dt_ms: int = TICK_MS

    @property
    def config(self) -> GameConfig:
        return self.world.config

    # Flags ───────────────────────────────────────────────────────────────

    def is_over(self) -> bool:
        return not self.running

    def toggle_pause(self) -> bool:
        """Pause or resume.  No-op once the game is over."""
        if not self.running:
            return self.paused
        self.paused = not self.paused
        logger.debug("Paused" if self.paused else "Resumed")
        return self.paused

    def toggle_cheat(self) -> bool:
        """Switch cheat mode.  No-op once the game is over."""
        if not self.running:
            return self.cheat_mode
        self.cheat_mode = not self.cheat_mode
        logger.info("Cheat mode %s", "on" if self.cheat_mode else "off")
        return self.cheat_mode

    @property
    def accepts_input(self) -> bool:
        return self.running and not self.paused

    # Tick ────────────────────────────────────────────────────────────────

    def tick(self) -> bool:
        """Advance the simulation by one tick.

        Returns True if the world moved; False while paused or over.
        """
        if not self.running or self.paused:
            return False

        result = step(self.world, self.cheat_mode, self.dt_ms)

        if result.scored:
            self._update_high_score()
        if result.lethal:
            self._game_over(result.hit_players)
        return True

    def _update_high_score(self) -> None:
        best = self.world.best_score
        if best > self.high_score:
            self.high_score = best
            self.store.save_high_score(best)

    def _game_over(self, hit_players: list[int]) -> None:
        self.running = False
        self.paused = False
        logger.info(
            "Game over after %d ticks: player(s) %s hit, best score %d",
            self.world.tick_count,
            ", ".join(str(p) for p in hit_players),
            self.world.best_score,
        )

    # Input ───────────────────────────────────────────────────────────────

    def handle_input(self, y: float) -> bool:
        """Pointer-down / tap at vertical coordinate *y*."""
        if not self.accepts_input:
            return False
        return self.router.tap(y)

    def flip_player(self, index: int) -> bool:
        if not self.accepts_input:
            return False
        return self.router.flip(index)

    def touch_start(self, touches: Iterable[tuple[int, float]]) -> int:
        """Forward new touches.  While paused or over they are only recorded."""
        if not self.accepts_input:
            self.router.hold(touches)
            return 0
        return self.router.touch_start(touches)

    def touch_move(self, touches: Iterable[tuple[int, float]]) -> int:
        if not self.accepts_input:
            self.router.hold(touches)
            return 0
        return self.router.touch_move(touches)

    def touch_end(self, touch_ids: Iterable[int]) -> None:
        self.router.touch_end(touch_ids)

    def dispatch(self, event: InputEvent) -> None:
        """Apply a discrete input event."""
        if event.action == GameAction.PAUSE:
            self.toggle_pause()
        elif event.action == GameAction.TOGGLE_CHEAT:
            self.toggle_cheat()
        else:
            index = self.router.resolve(event)
            if index is not None:
                self.flip_player(index)

    # Settings ────────────────────────────────────────────────────────────

    def apply_settings(self, overrides: Mapping[str, Any]) -> GameConfig:
        """Merge *overrides* into the config, update live entities, persist.

        Runs between ticks.  New fireball size and speed apply to the
        next volley; fireballs already in flight keep theirs.
        """
        config = merge_config(self.world.config, overrides)
        if config == self.world.config:
            return config
        self.world.config = config
        alien = self.world.alien
        alien.radius = config.alien_size / 2
        alien.set_base_rotation_speed(config.alien_rotation_speed)
        for player in self.world.players:
            player.angular_speed = config.hero_speed
        self.store.save_config(config)
        logger.debug("Applied settings %s", config)
        return config

    # Snapshot ────────────────────────────────────────────────────────────

    def snapshot(self) -> GameSnapshot:
        world = self.world
        cx, cy, radius = world.center_x, world.center_y, world.orbit_radius
        alien = world.alien
        alien_view = AlienView(
            x=alien.x,
            y=alien.y,
            radius=alien.radius,
            rotation_angle=alien.rotation_angle,
            rotation_speed=alien.rotation_speed,
            state=alien.state,
            phase_elapsed=alien.phase_elapsed,
            show_telegraph=alien.show_telegraph,
            target_angles=alien.target_angles,
            telegraph_points=tuple(
                point_on_circle(cx, cy, radius, a) for a in alien.target_angles
            ),
        )
        players = []
        for p in world.players:
            px, py = world.player_position(p)
            players.append(PlayerView(
                player_id=p.player_id,
                angle=p.angle,
                x=px,
                y=py,
                hit_radius=p.hit_radius,
                direction=p.direction,
                score=p.score,
                alive=p.alive,
            ))
        fireballs = tuple(
            FireballView(x=f.x, y=f.y, travel_angle=f.travel_angle,
                         hit_radius=f.hit_radius)
            for f in world.fireballs
        )
        return GameSnapshot(
            width=world.width,
            height=world.height,
            center_x=cx,
            center_y=cy,
            orbit_radius=radius,
            alien=alien_view,
            players=tuple(players),
            fireballs=fireballs,
            running=self.running,
            paused=self.paused,
            cheat_mode=self.cheat_mode,
            show_hit_indicator=world.hit_indicator.active,
            high_score=self.high_score,
            tick_count=world.tick_count,
        )


# ── Factory ─────────────────────────────────────────────────────────────────


def create_session(
    player_count: int = 1,
    width: float = SCREEN_WIDTH,
    height: float = SCREEN_HEIGHT,
    store: Optional[SettingsStore] = None,
    rng: Optional[random.Random] = None,
    mode: FiringMode = FiringMode.TELEGRAPH,
    cheat_mode: bool = False,
    dt_ms: int = TICK_MS,
) -> GameSession:
    """Build a session from the persisted config and high score."""
    if store is None:
        store = SettingsStore()
    if rng is None:
        rng = random.Random()
    config = store.load_config()
    high_score = store.load_high_score()

    alien_cls = ClassicAlien if mode == FiringMode.CLASSIC else Alien
    alien = alien_cls(
        x=width / 2,
        y=height / 2,
        radius=config.alien_size / 2,
        base_rotation_speed=config.alien_rotation_speed,
        rng=rng,
    )
    players = create_players(player_count, config.hero_speed)
    world = World(
        width=width,
        height=height,
        config=config,
        alien=alien,
        players=players,
        fireballs=FireballManager(width=width, height=height),
    )
    router = InputRouter(players=players, screen_height=height)
    logger.info(
        "New %s session: %d player(s), %gx%g, high score %d",
        mode.value, len(players), width, height, high_score,
    )
    return GameSession(
        world=world,
        router=router,
        store=store,
        high_score=high_score,
        cheat_mode=cheat_mode,
        dt_ms=dt_ms,
    )
