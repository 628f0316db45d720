"""
Input handling for Alien Orbit.

Maps taps, touches and keys onto player direction flips.  In a
two-player session the screen is split horizontally: the top half
(including the midpoint) steers player 2, the bottom half player 1.
A one-player session ignores the split.

Touches are deduplicated by identifier so that a finger held down
while another lands is not counted twice.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Optional

from alien_orbit.models.player import Player


class GameAction(Enum):
    """Discrete commands the shell can send to a session."""
    TAP = auto()
    FLIP_PLAYER = auto()
    PAUSE = auto()
    TOGGLE_CHEAT = auto()
    RESTART = auto()
    QUIT = auto()


@dataclass
class InputEvent:
    """Abstract input event consumed by the session."""
    action: GameAction
    y: float = 0.0
    player_index: int = 0


@dataclass
class InputRouter:
    """Routes raw input to the owning session's players."""

    players: list[Player]
    screen_height: float
    active_touches: set[int] = field(default_factory=set)

    def player_index_for(self, y: float) -> int:
        """Return the index of the player steered from height *y*."""
        if len(self.players) < 2:
            return 0
        return 1 if y <= self.screen_height / 2 else 0

    def flip(self, index: int) -> bool:
        """Flip player *index*.  Returns True if a direction changed."""
        if index < 0 or index >= len(self.players):
            return False
        return self.players[index].flip()

    def tap(self, y: float) -> bool:
        return self.flip(self.player_index_for(y))

    # Touch tracking ──────────────────────────────────────────────────────

    def touch_start(self, touches: Iterable[tuple[int, float]]) -> int:
        """Register (*touch_id*, *y*) pairs; only new identifiers flip.

        Returns the number of flips performed.
        """
        flipped = 0
        for touch_id, y in touches:
            if touch_id in self.active_touches:
                continue
            self.active_touches.add(touch_id)
            if self.tap(y):
                flipped += 1
        return flipped

    def hold(self, touches: Iterable[tuple[int, float]]) -> None:
        """Record identifiers without flipping anyone."""
        self.active_touches.update(touch_id for touch_id, _ in touches)

    # A move for an unseen identifier counts as its start.
    touch_move = touch_start

    def touch_end(self, touch_ids: Iterable[int]) -> None:
        """Release identifiers on touch-end or touch-cancel."""
        for touch_id in touch_ids:
            self.active_touches.discard(touch_id)

    def touch_cancel(self, touch_ids: Iterable[int]) -> None:
        self.touch_end(touch_ids)

    def resolve(self, event: InputEvent) -> Optional[int]:
        """Return the player index an event steers, or None."""
        if event.action == GameAction.TAP:
            return self.player_index_for(event.y)
        if event.action == GameAction.FLIP_PLAYER:
            return event.player_index
        return None
