"""
Tests for input routing and HUD text.
"""

import random

import pytest

from alien_orbit.game import create_session
from alien_orbit.models.player import create_players
from alien_orbit.ui.settings_store import MemoryBackend, SettingsStore
from alien_orbit.ui.text import ScoreDisplay, status_banners
from alien_orbit.utils.input_handler import GameAction, InputEvent, InputRouter


def make_router(count=2, height=600):
    return InputRouter(players=create_players(count, 0.03), screen_height=height)


def make_session(**kwargs):
    return create_session(
        store=SettingsStore(MemoryBackend()), rng=random.Random(3), **kwargs
    )


# ── Routing ─────────────────────────────────────────────────────────────────


class TestInputRouter:
    @pytest.mark.parametrize("y, index", [
        (0, 1),
        (299.9, 1),
        (300, 1),
        (300.1, 0),
        (599, 0),
    ])
    def test_two_player_split(self, y, index):
        assert make_router().player_index_for(y) == index

    @pytest.mark.parametrize("y", [0, 300, 599])
    def test_single_player_ignores_split(self, y):
        assert make_router(count=1).player_index_for(y) == 0

    def test_tap_flips_bottom_player(self):
        router = make_router()
        assert router.tap(500) is True
        assert router.players[0].direction == -1
        assert router.players[1].direction == 1

    def test_tap_flips_top_player(self):
        router = make_router()
        router.tap(100)
        assert router.players[0].direction == 1
        assert router.players[1].direction == -1

    def test_double_tap_restores_direction(self):
        router = make_router(count=1)
        router.tap(10)
        router.tap(10)
        assert router.players[0].direction == 1

    def test_dead_player_not_flipped(self):
        router = make_router()
        router.players[1].kill()
        assert router.tap(100) is False
        assert router.players[1].direction == 1

    def test_flip_out_of_range(self):
        router = make_router(count=1)
        assert router.flip(1) is False
        assert router.flip(-1) is False

    def test_resolve(self):
        router = make_router()
        assert router.resolve(InputEvent(GameAction.TAP, y=50)) == 1
        assert router.resolve(InputEvent(GameAction.FLIP_PLAYER, player_index=0)) == 0
        assert router.resolve(InputEvent(GameAction.PAUSE)) is None


class TestTouches:
    def test_new_touch_flips(self):
        router = make_router()
        assert router.touch_start([(1, 500)]) == 1
        assert router.players[0].direction == -1

    def test_held_touch_not_counted_twice(self):
        router = make_router()
        router.touch_start([(1, 500)])
        # Second finger lands; the event lists both active touches
        assert router.touch_start([(1, 500), (2, 100)]) == 1
        assert router.players[0].direction == -1
        assert router.players[1].direction == -1

    def test_move_of_active_touch_ignored(self):
        router = make_router()
        router.touch_start([(1, 500)])
        assert router.touch_move([(1, 480)]) == 0
        assert router.players[0].direction == -1

    def test_move_of_unseen_touch_counts_as_start(self):
        router = make_router()
        assert router.touch_move([(5, 500)]) == 1
        assert 5 in router.active_touches

    def test_touch_end_releases_identifier(self):
        router = make_router()
        router.touch_start([(1, 500)])
        router.touch_end([1])
        assert router.touch_start([(1, 500)]) == 1
        assert router.players[0].direction == 1

    def test_touch_cancel_releases_identifier(self):
        router = make_router()
        router.touch_start([(1, 500)])
        router.touch_cancel([1])
        assert router.active_touches == set()

    def test_unknown_end_is_harmless(self):
        router = make_router()
        router.touch_end([42])
        assert router.active_touches == set()


# ── Session input gating ────────────────────────────────────────────────────


class TestSessionInput:
    def test_tap_routed_through_session(self):
        session = make_session(player_count=2, height=600)
        assert session.handle_input(100) is True
        assert session.world.players[1].direction == -1

    def test_dispatch_flip_player(self):
        session = make_session(player_count=2)
        session.dispatch(InputEvent(GameAction.FLIP_PLAYER, player_index=1))
        assert session.world.players[1].direction == -1

    def test_dispatch_pause_and_cheat(self):
        session = make_session()
        session.dispatch(InputEvent(GameAction.PAUSE))
        session.dispatch(InputEvent(GameAction.TOGGLE_CHEAT))
        assert session.paused is True
        assert session.cheat_mode is True

    def test_touch_recorded_but_not_flipped_while_paused(self):
        session = make_session()
        session.toggle_pause()
        assert session.touch_start([(1, 10)]) == 0
        assert session.router.active_touches == {1}
        assert session.world.players[0].direction == 1

    def test_touch_held_through_pause_does_not_flip_on_move(self):
        session = make_session()
        session.toggle_pause()
        session.touch_start([(1, 10)])
        session.toggle_pause()
        assert session.touch_move([(1, 20)]) == 0
        assert session.world.players[0].direction == 1

    def test_touch_held_through_game_over_stays_recorded(self):
        session = make_session()
        session.touch_start([(2, 10)])
        session.running = False
        session.touch_move([(3, 10)])
        assert session.router.active_touches == {2, 3}

    def test_dispatch_tap_uses_screen_split(self):
        session = make_session(player_count=2, height=600)
        session.dispatch(InputEvent(GameAction.TAP, y=450))
        assert session.world.players[0].direction == -1
        assert session.world.players[1].direction == 1

    def test_input_ignored_after_game_over(self):
        session = make_session()
        session.running = False
        assert session.handle_input(10) is False
        assert session.flip_player(0) is False
        assert session.world.players[0].direction == 1

    def test_touch_end_always_processed(self):
        session = make_session()
        session.touch_start([(1, 10)])
        session.toggle_pause()
        session.touch_end([1])
        assert session.router.active_touches == set()


# ── HUD text ────────────────────────────────────────────────────────────────


class TestScoreDisplay:
    def test_single_player(self):
        display = ScoreDisplay(player_scores=[4], high_score=9)
        assert display.format_score() == "SCORE: 4"
        assert display.format_high_score() == "HIGH: 9"

    def test_two_players(self):
        display = ScoreDisplay(player_scores=[2, 5])
        assert display.format_score() == "P1: 2 | P2: 5"
        assert display.format_final_score() == "FINAL: 5"

    def test_empty(self):
        assert ScoreDisplay().format_score() == "SCORE: 0"

    def test_update_from_snapshot(self):
        session = make_session(player_count=2)
        session.world.players[0].score = 3
        session.high_score = 8
        display = ScoreDisplay()
        display.update(session.snapshot())
        assert display.player_scores == [3, 0]
        assert display.high_score == 8


class TestStatusBanners:
    def test_running(self):
        assert status_banners(make_session().snapshot()) == []

    def test_paused_with_cheat(self):
        session = make_session(cheat_mode=True)
        session.toggle_pause()
        assert status_banners(session.snapshot()) == ["PAUSED", "CHEAT MODE"]

    def test_game_over(self):
        session = make_session()
        session.running = False
        assert status_banners(session.snapshot()) == ["GAME OVER"]

    def test_hit(self):
        session = make_session(cheat_mode=True)
        session.world.hit_indicator.trigger()
        assert status_banners(session.snapshot()) == ["HIT", "CHEAT MODE"]
