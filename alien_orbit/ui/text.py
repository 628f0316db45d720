"""
UI text utilities for Alien Orbit.

Formats scores and status banners from a ``GameSnapshot`` for the HUD.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from alien_orbit.snapshot import GameSnapshot


@dataclass
class ScoreDisplay:
    """Tracks and formats player scores and the high score."""

    player_scores: list[int] = field(default_factory=list)
    high_score: int = 0

    def update(self, snapshot: GameSnapshot) -> None:
        self.player_scores = [p.score for p in snapshot.players]
        self.high_score = snapshot.high_score

    def format_score(self) -> str:
        if len(self.player_scores) <= 1:
            score = self.player_scores[0] if self.player_scores else 0
            return f"SCORE: {score}"
        return " | ".join(
            f"P{i + 1}: {score}" for i, score in enumerate(self.player_scores)
        )

    def format_high_score(self) -> str:
        return f"HIGH: {self.high_score}"

    def format_final_score(self) -> str:
        best = max(self.player_scores, default=0)
        return f"FINAL: {best}"


def status_banners(snapshot: GameSnapshot) -> list[str]:
    """Return the overlay banners to draw, most important first."""
    banners: list[str] = []
    if snapshot.game_over:
        banners.append("GAME OVER")
    elif snapshot.paused:
        banners.append("PAUSED")
    if snapshot.show_hit_indicator:
        banners.append("HIT")
    if snapshot.cheat_mode:
        banners.append("CHEAT MODE")
    return banners
