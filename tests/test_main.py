"""
Tests for main.py – argument parsing and the app shell without a display.
"""

import pytest

from alien_orbit.config import DEFAULT_SETTINGS_FILE, SCREEN_HEIGHT, SCREEN_WIDTH
from alien_orbit.game import FiringMode
from alien_orbit.utils.input_handler import GameAction, InputEvent
from main import AlienOrbitApp, parse_args


# ── Argument parsing ───────────────────────────────────────────────────────


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.players == 1
        assert args.width == SCREEN_WIDTH
        assert args.height == SCREEN_HEIGHT
        assert args.fullscreen is False
        assert args.cheat is False
        assert args.classic is False
        assert args.settings == DEFAULT_SETTINGS_FILE
        assert args.seed is None
        assert args.debug is False

    def test_player_count(self):
        for n in (1, 2):
            assert parse_args(["--players", str(n)]).players == n

    @pytest.mark.parametrize("value", ["0", "3", "two"])
    def test_invalid_player_count_rejected(self, value):
        with pytest.raises(SystemExit):
            parse_args(["--players", value])

    def test_flags(self):
        args = parse_args(["--fullscreen", "--cheat", "--classic", "--debug"])
        assert args.fullscreen is True
        assert args.cheat is True
        assert args.classic is True
        assert args.debug is True

    def test_settings_and_seed(self):
        args = parse_args(["--settings", "x.json", "--seed", "42"])
        assert args.settings == "x.json"
        assert args.seed == 42

    def test_window_size(self):
        args = parse_args(["--width", "640", "--height", "480"])
        assert (args.width, args.height) == (640, 480)


# ── AlienOrbitApp (without pygame display) ──────────────────────────────────


class TestAlienOrbitApp:
    def test_app_defaults(self):
        app = AlienOrbitApp()
        assert app.width == SCREEN_WIDTH
        assert app.players == 1
        assert app.running is False
        assert app.session is None
        assert app.mode == FiringMode.TELEGRAPH

    def test_classic_mode(self):
        assert AlienOrbitApp(classic=True).mode == FiringMode.CLASSIC

    def test_new_session_uses_settings_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text('{"gameHighScore": "17"}')
        app = AlienOrbitApp(players=2, settings_path=str(path), seed=1)
        session = app.new_session()
        assert app.session is session
        assert session.high_score == 17
        assert len(session.world.players) == 2

    def test_seed_makes_sessions_repeatable(self, tmp_path):
        path = str(tmp_path / "settings.json")
        a = AlienOrbitApp(settings_path=path, seed=5).new_session()
        b = AlienOrbitApp(settings_path=path, seed=5).new_session()
        assert (
            a.world.alien.rotation_phase_duration
            == b.world.alien.rotation_phase_duration
        )

    def test_cheat_flag_starts_in_cheat_mode(self, tmp_path):
        app = AlienOrbitApp(cheat=True, settings_path=str(tmp_path / "s.json"))
        assert app.new_session().cheat_mode is True


class TestHandle:
    def make_app(self, tmp_path):
        app = AlienOrbitApp(settings_path=str(tmp_path / "settings.json"), seed=2)
        app.new_session()
        app.running = True
        return app

    def test_quit(self, tmp_path):
        app = self.make_app(tmp_path)
        app.handle(InputEvent(GameAction.QUIT))
        assert app.running is False

    def test_pause_forwarded(self, tmp_path):
        app = self.make_app(tmp_path)
        app.handle(InputEvent(GameAction.PAUSE))
        assert app.session.paused is True

    def test_restart_ignored_while_running(self, tmp_path):
        app = self.make_app(tmp_path)
        session = app.session
        app.handle(InputEvent(GameAction.RESTART))
        assert app.session is session

    def test_restart_after_game_over(self, tmp_path):
        app = self.make_app(tmp_path)
        old = app.session
        old.running = False
        app.handle(InputEvent(GameAction.RESTART))
        assert app.session is not old
        assert app.session.running is True

    def test_restart_keeps_held_touches(self, tmp_path):
        app = self.make_app(tmp_path)
        app.session.touch_start([(4, 500)])
        app.session.running = False
        app.handle(InputEvent(GameAction.RESTART))
        assert app.session.router.active_touches == {4}
        assert app.session.touch_move([(4, 480)]) == 0
        assert app.session.world.players[0].direction == 1


class TestTranslateKey:
    def test_key_bindings(self):
        pygame = pytest.importorskip("pygame")
        app = AlienOrbitApp()
        assert app.translate_key(pygame.K_ESCAPE).action == GameAction.QUIT
        assert app.translate_key(pygame.K_p).action == GameAction.PAUSE
        assert app.translate_key(pygame.K_c).action == GameAction.TOGGLE_CHEAT
        assert app.translate_key(pygame.K_r).action == GameAction.RESTART
        assert app.translate_key(pygame.K_SPACE).player_index == 0
        assert app.translate_key(pygame.K_RETURN).player_index == 0
        assert app.translate_key(pygame.K_UP).player_index == 1
        assert app.translate_key(pygame.K_z) is None
