"""
Main entry point for Alien Orbit.

Initializes pygame, drives the 60Hz tick loop, and draws each session
snapshot with placeholder shapes.

Usage:
    python main.py [OPTIONS]

Options:
    --players N          Number of players (1 or 2, default: 1)
    --width W            Window width in pixels
    --height H           Window height in pixels
    --fullscreen         Launch in fullscreen mode
    --cheat              Start with cheat mode on
    --classic            Cooldown-driven alien instead of the telegraphing one
    --settings PATH      Settings / high-score file (default: settings.json)
    --seed N             Seed the alien's random phase timings
    --debug              Enable debug logging and overlays

Controls:
    Click / tap          Reverse a player (top half: P2, bottom half: P1)
    Space / Enter        Reverse player 1
    Up arrow             Reverse player 2
    P                    Pause / resume
    C                    Toggle cheat mode
    R                    Restart after game over
    ESC                  Quit
"""

from __future__ import annotations

import argparse
import logging
import math
import random
import sys
from dataclasses import dataclass, field
from typing import Optional

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from alien_orbit.config import (
    DEFAULT_SETTINGS_FILE,
    MAX_PLAYERS,
    MIN_PLAYERS,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    UPDATE_RATE,
)
from alien_orbit.game import FiringMode, GameSession, create_session
from alien_orbit.models.alien import AlienState
from alien_orbit.snapshot import GameSnapshot
from alien_orbit.ui.settings_store import SettingsStore
from alien_orbit.ui.text import ScoreDisplay, status_banners
from alien_orbit.utils.input_handler import GameAction, InputEvent

logger = logging.getLogger("alien_orbit")


# ── Constants ───────────────────────────────────────────────────────────────

COLOR_BACKGROUND = (12, 12, 24)
COLOR_ORBIT = (200, 40, 40)
COLOR_ALIEN = (75, 85, 99)
COLOR_ALIEN_EYE = (245, 158, 11)
COLOR_TELEGRAPH = (255, 230, 120)
COLOR_FIREBALL = (245, 120, 11)
COLOR_TEXT = (255, 255, 255)
COLOR_WARNING = (255, 0, 0)
PLAYER_COLORS = [(0, 150, 255), (255, 100, 0)]


# ── Argument parsing ───────────────────────────────────────────────────────


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Alien Orbit – dodge the alien's volleys",
    )
    parser.add_argument(
        "--players", type=int, default=MIN_PLAYERS,
        choices=range(MIN_PLAYERS, MAX_PLAYERS + 1),
        metavar="N",
        help=f"Number of players ({MIN_PLAYERS}-{MAX_PLAYERS}, default: {MIN_PLAYERS})",
    )
    parser.add_argument(
        "--width", type=int, default=SCREEN_WIDTH,
        help=f"Window width (default: {SCREEN_WIDTH})",
    )
    parser.add_argument(
        "--height", type=int, default=SCREEN_HEIGHT,
        help=f"Window height (default: {SCREEN_HEIGHT})",
    )
    parser.add_argument(
        "--fullscreen", action="store_true",
        help="Launch in fullscreen mode",
    )
    parser.add_argument(
        "--cheat", action="store_true",
        help="Start with cheat mode on (hits are not lethal, no scoring)",
    )
    parser.add_argument(
        "--classic", action="store_true",
        help="Use the cooldown-driven alien",
    )
    parser.add_argument(
        "--settings", default=DEFAULT_SETTINGS_FILE,
        metavar="PATH",
        help=f"Settings and high-score file (default: {DEFAULT_SETTINGS_FILE})",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        metavar="N",
        help="Seed for the alien's random timings",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable debug logging and overlays",
    )
    return parser.parse_args(argv)


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ── Application ─────────────────────────────────────────────────────────────


@dataclass
class AlienOrbitApp:
    """Top-level application wrapper.

    Owns the pygame display, the current session, and the main loop.
    """

    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    players: int = MIN_PLAYERS
    fullscreen: bool = False
    debug: bool = False
    cheat: bool = False
    classic: bool = False
    settings_path: str = DEFAULT_SETTINGS_FILE
    seed: Optional[int] = None

    # Runtime state (initialized in ``init``)
    screen: object = field(default=None, repr=False)
    clock: object = field(default=None, repr=False)
    font: object = field(default=None, repr=False)
    big_font: object = field(default=None, repr=False)
    session: Optional[GameSession] = None
    store: Optional[SettingsStore] = None
    rng: random.Random = field(default_factory=random.Random, repr=False)
    score_display: ScoreDisplay = field(default_factory=ScoreDisplay)
    running: bool = False

    # Performance tracking
    frame_times: list[float] = field(default_factory=list)
    fps: float = 0.0

    def __post_init__(self) -> None:
        if self.seed is not None:
            self.rng.seed(self.seed)

    @property
    def mode(self) -> FiringMode:
        return FiringMode.CLASSIC if self.classic else FiringMode.TELEGRAPH

    # ── Session lifecycle ───────────────────────────────────────────────

    def new_session(self) -> GameSession:
        """Start a fresh session, re-reading config and high score."""
        if self.store is None:
            self.store = SettingsStore.from_file(self.settings_path)
        held = set(self.session.router.active_touches) if self.session else set()
        self.session = create_session(
            player_count=self.players,
            width=self.width,
            height=self.height,
            store=self.store,
            rng=self.rng,
            mode=self.mode,
            cheat_mode=self.cheat,
        )
        # Fingers still down across a restart must not flip on their next move
        self.session.router.active_touches.update(held)
        return self.session

    # ── Initialisation ──────────────────────────────────────────────────

    def init(self) -> bool:
        """Initialise pygame and create the display surface.

        Returns True on success, False on failure.
        """
        if pygame is None:
            print("Error: pygame is required. Install with: pip install pygame",
                  file=sys.stderr)
            return False

        try:
            pygame.init()
        except Exception as exc:
            print(f"Error initialising pygame: {exc}", file=sys.stderr)
            return False

        flags = 0
        if self.fullscreen:
            flags |= pygame.FULLSCREEN

        try:
            self.screen = pygame.display.set_mode((self.width, self.height), flags)
        except Exception as exc:
            print(f"Error creating display: {exc}", file=sys.stderr)
            pygame.quit()
            return False

        if self.fullscreen:
            self.width, self.height = self.screen.get_size()

        pygame.display.set_caption("Alien Orbit")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 32)
        self.big_font = pygame.font.Font(None, 96)

        self.new_session()
        self.running = True
        return True

    # ── Main loop ───────────────────────────────────────────────────────

    def run(self) -> None:
        """Execute the main loop at 60 FPS."""
        if not self.running:
            return

        try:
            while self.running:
                self._handle_events()
                self.session.tick()
                self._render(self.session.snapshot())

                elapsed_ms = self.clock.tick(UPDATE_RATE)

                # Performance tracking
                self.frame_times.append(elapsed_ms / 1000.0)
                if len(self.frame_times) > 60:
                    self.frame_times.pop(0)
                avg = sum(self.frame_times) / len(self.frame_times)
                self.fps = 1.0 / avg if avg > 0 else 0.0
        except KeyboardInterrupt:
            pass
        finally:
            self.shutdown()

    # ── Event handling ──────────────────────────────────────────────────

    def translate_key(self, key: int) -> Optional[InputEvent]:
        """Map a pygame key code to an input event."""
        if key == pygame.K_ESCAPE:
            return InputEvent(GameAction.QUIT)
        if key == pygame.K_p:
            return InputEvent(GameAction.PAUSE)
        if key == pygame.K_c:
            return InputEvent(GameAction.TOGGLE_CHEAT)
        if key == pygame.K_r:
            return InputEvent(GameAction.RESTART)
        if key in (pygame.K_SPACE, pygame.K_RETURN):
            return InputEvent(GameAction.FLIP_PLAYER, player_index=0)
        if key == pygame.K_UP:
            return InputEvent(GameAction.FLIP_PLAYER, player_index=1)
        return None

    def handle(self, event: InputEvent) -> None:
        """Apply an input event to the app or the current session."""
        if event.action == GameAction.QUIT:
            self.running = False
        elif event.action == GameAction.RESTART:
            if self.session is None or self.session.is_over():
                self.new_session()
        elif self.session is not None:
            self.session.dispatch(event)

    def _handle_events(self) -> None:
        """Process pygame events.

        Finger events carry normalised coordinates and a finger id,
        which feed the session's touch deduplication.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                mapped = self.translate_key(event.key)
                if mapped is not None:
                    self.handle(mapped)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                # Touch input also synthesises mouse events; skip those
                if getattr(event, "touch", False):
                    continue
                if event.button == 1:
                    self.handle(InputEvent(GameAction.TAP, y=event.pos[1]))

            elif event.type == pygame.FINGERDOWN:
                self.session.touch_start([(event.finger_id, event.y * self.height)])

            elif event.type == pygame.FINGERMOTION:
                self.session.touch_move([(event.finger_id, event.y * self.height)])

            elif event.type == pygame.FINGERUP:
                self.session.touch_end([event.finger_id])

    # ── Rendering ───────────────────────────────────────────────────────

    def _render(self, snap: GameSnapshot) -> None:
        """Draw one snapshot with placeholder shapes."""
        if self.screen is None:
            return

        self.screen.fill(COLOR_BACKGROUND)
        center = (int(snap.center_x), int(snap.center_y))
        pygame.draw.circle(self.screen, COLOR_ORBIT, center,
                           int(snap.orbit_radius), 2)

        self._render_alien(snap)
        for fb in snap.fireballs:
            pygame.draw.circle(self.screen, COLOR_FIREBALL,
                               (int(fb.x), int(fb.y)), max(1, int(fb.hit_radius)))
        for i, player in enumerate(snap.players):
            if not player.alive:
                continue
            color = PLAYER_COLORS[i % len(PLAYER_COLORS)]
            pygame.draw.circle(self.screen, color,
                               (int(player.x), int(player.y)),
                               max(1, int(player.hit_radius)))

        self._render_hud(snap)
        if self.debug:
            self._render_debug(snap)

        pygame.display.flip()

    def _render_alien(self, snap: GameSnapshot) -> None:
        alien = snap.alien
        center = (int(alien.x), int(alien.y))
        pygame.draw.circle(self.screen, COLOR_ALIEN, center,
                           max(1, int(alien.radius)))
        tip = (
            int(alien.x + math.cos(alien.rotation_angle) * alien.radius),
            int(alien.y + math.sin(alien.rotation_angle) * alien.radius),
        )
        pygame.draw.line(self.screen, COLOR_ALIEN_EYE, center, tip, 3)

        if alien.show_telegraph:
            for point in alien.telegraph_points:
                target = (int(point[0]), int(point[1]))
                pygame.draw.line(self.screen, COLOR_TELEGRAPH, center, target, 1)
                pygame.draw.circle(self.screen, COLOR_TELEGRAPH, target, 12, 2)

    def _render_hud(self, snap: GameSnapshot) -> None:
        self.score_display.update(snap)
        score_surf = self.font.render(self.score_display.format_score(),
                                      True, COLOR_TEXT)
        high_surf = self.font.render(self.score_display.format_high_score(),
                                     True, COLOR_TEXT)
        self.screen.blit(score_surf, (10, 10))
        self.screen.blit(high_surf, (10, 10 + score_surf.get_height()))

        y = self.height // 2 - 48
        for banner in status_banners(snap):
            color = COLOR_WARNING if banner in ("HIT", "CHEAT MODE") else COLOR_TEXT
            surf = self.big_font.render(banner, True, color)
            self.screen.blit(surf, (self.width // 2 - surf.get_width() // 2, y))
            y += surf.get_height()

        if snap.game_over:
            final = self.font.render(
                f"{self.score_display.format_final_score()}  -  press R",
                True, COLOR_TEXT,
            )
            self.screen.blit(final, (self.width // 2 - final.get_width() // 2, y))

    def _render_debug(self, snap: GameSnapshot) -> None:
        """Draw debug overlays (FPS, alien phase, fireball count)."""
        alien = snap.alien
        texts = [
            f"FPS: {self.fps:.1f}",
            f"Alien: {alien.state.name} {alien.phase_elapsed} ms",
            f"Spin: {alien.rotation_speed:.4f}",
            f"Fireballs: {len(snap.fireballs)}",
            f"Tick: {snap.tick_count}",
        ]
        y = self.height - 20 * len(texts) - 5
        for text in texts:
            surface = self.font.render(text, True, (0, 255, 0))
            self.screen.blit(surface, (5, y))
            y += 20
        if alien.state == AlienState.AIMING:
            pygame.draw.circle(self.screen, (0, 255, 0),
                               (int(alien.x), int(alien.y)), 4)

    # ── Shutdown ────────────────────────────────────────────────────────

    def shutdown(self) -> None:
        """Clean up and quit pygame."""
        self.running = False
        if pygame is not None:
            try:
                pygame.quit()
            except Exception:
                logger.debug("pygame.quit failed", exc_info=True)


# ── Entry point ─────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    """Application entry point.  Returns exit code."""
    args = parse_args(argv)
    configure_logging(args.debug)

    app = AlienOrbitApp(
        width=args.width,
        height=args.height,
        players=args.players,
        fullscreen=args.fullscreen,
        debug=args.debug,
        cheat=args.cheat,
        classic=args.classic,
        settings_path=args.settings,
        seed=args.seed,
    )

    if not app.init():
        return 1

    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
