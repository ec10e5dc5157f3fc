"""
Tests for the game lifecycle and tick semantics.
"""

import dataclasses

import pytest

from zone_arena.survival_core.config_loader import load_config
from zone_arena.survival_core.game import CoreGame, GameOverSummary, GamePhase
from zone_arena.survival_core.input_state import Direction
from zone_arena.survival_core.zones import Zone


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def calm_config(config):
    """Config without random drift, so the dot only moves when pushed."""
    return dataclasses.replace(
        config,
        forces=dataclasses.replace(config.forces, random_strength=0.0)
    )


@pytest.fixture
def game(config):
    game = CoreGame(config=config, seed=42)
    game.reset(seed=42)
    return game


@pytest.fixture
def calm_game(calm_config):
    game = CoreGame(config=calm_config, seed=0)
    game.reset()
    return game


class TestPhases:
    """WAITING -> RUNNING -> GAME_OVER -> WAITING."""

    def test_starts_waiting(self, game):
        assert game.phase is GamePhase.WAITING
        assert not game.is_running

    def test_tick_does_nothing_while_waiting(self, game):
        result = game.tick()
        assert game.ticks == 0
        assert result.delta_score == 0.0
        assert game.body.position == (300.0, 300.0)

    def test_any_key_starts(self, game):
        game.key_down(None)
        assert game.phase is GamePhase.RUNNING

    def test_start_key_is_not_held(self, game):
        game.key_down(Direction.UP)
        assert game.is_running
        assert game.input_state.held() == frozenset()

    def test_keys_steer_while_running(self, game):
        game.start()
        game.key_down(Direction.LEFT)
        assert game.input_state.is_held(Direction.LEFT)
        game.key_up(Direction.LEFT)
        assert not game.input_state.is_held(Direction.LEFT)

    def test_key_after_game_over_returns_to_prompt(self, calm_game):
        calm_game.start()
        calm_game.body.x += 200
        calm_game.tick()
        assert calm_game.phase is GamePhase.GAME_OVER

        calm_game.key_down(Direction.DOWN)
        assert calm_game.phase is GamePhase.WAITING
        assert calm_game.ticks == 0
        assert calm_game.score == 0.0
        assert calm_game.zones.radii == (100.0, 150.0, 180.0)
        assert calm_game.body.position == (300.0, 300.0)
        # Summary survives for the start prompt
        assert calm_game.last_result is not None

    def test_key_up_recorded_while_waiting(self, game):
        game.set_input([0, 0, 1, 0])
        game.key_up(Direction.LEFT)
        assert game.phase is GamePhase.WAITING
        assert game.input_state.held() == frozenset()

    def test_key_up_recorded_after_game_over(self, calm_game):
        calm_game.start()
        calm_game.body.x += 200
        calm_game.tick()
        assert calm_game.phase is GamePhase.GAME_OVER

        calm_game.set_input([1, 0, 0, 1])
        calm_game.key_up(Direction.UP)
        assert calm_game.phase is GamePhase.GAME_OVER
        assert calm_game.input_state.held() == frozenset({Direction.RIGHT})

    def test_reset_releases_held_keys(self, game):
        game.start()
        game.key_down(Direction.RIGHT)
        game.reset()
        assert game.input_state.held() == frozenset()


class TestTick:
    """One tick of simulation."""

    def test_first_tick_scores_safe_zone(self, game, config):
        game.start()
        result = game.tick()
        assert game.ticks == 1
        assert result.zone is Zone.SAFE
        assert result.delta_score == pytest.approx(3.0 * config.physics.dt)
        assert game.time_alive == pytest.approx(config.physics.dt)

    def test_zones_shrink_while_running(self, game, config):
        game.start()
        for _ in range(60):
            game.tick()
        assert game.zones.safe_radius == pytest.approx(95.0)
        assert game.zones.fail_radius == pytest.approx(178.0)

    def test_one_second_at_center(self, calm_game):
        calm_game.start()
        for _ in range(60):
            calm_game.tick()
        assert calm_game.distance == 0.0
        assert calm_game.time_alive == pytest.approx(1.0)
        assert calm_game.score == pytest.approx(3.0)

    def test_held_key_pushes(self, calm_game):
        calm_game.start()
        calm_game.key_down(Direction.UP)
        calm_game.tick()
        assert calm_game.body.y < 300.0
        assert calm_game.body.vy < 0

    def test_caution_zone_scores_less(self, calm_game, calm_config):
        calm_game.start()
        calm_game.body.y += 120
        result = calm_game.tick()
        assert result.zone is Zone.CAUTION
        assert result.delta_score == pytest.approx(calm_config.physics.dt)

    def test_danger_zone_scores_nothing(self, calm_game):
        calm_game.start()
        calm_game.body.y += 160
        result = calm_game.tick()
        assert result.zone is Zone.DANGER
        assert result.delta_score == 0.0
        assert calm_game.time_alive > 0

    def test_custom_dt(self, calm_game):
        calm_game.start()
        calm_game.tick(0.5)
        assert calm_game.time_alive == pytest.approx(0.5)
        assert calm_game.zones.safe_radius == pytest.approx(97.5)


class TestGameOver:
    """Crossing the fail threshold."""

    def test_fail_ends_game(self, calm_game):
        calm_game.start()
        calm_game.body.x += 200
        result = calm_game.tick()
        assert result.terminated
        assert not result.truncated
        assert result.termination_reason == "fail_threshold"
        assert calm_game.phase is GamePhase.GAME_OVER
        assert calm_game.is_over

    def test_no_score_or_time_on_failing_tick(self, calm_game):
        calm_game.start()
        for _ in range(30):
            calm_game.tick()
        score_before = calm_game.score
        time_before = calm_game.time_alive

        calm_game.body.x += 250
        result = calm_game.tick()
        assert result.terminated
        assert result.delta_score == 0.0
        assert calm_game.score == score_before
        assert calm_game.time_alive == time_before

    def test_summary_message(self, calm_game):
        calm_game.start()
        for _ in range(90):
            calm_game.tick()
        calm_game.body.x += 250
        calm_game.tick()

        summary = calm_game.last_result
        assert summary.reason == "fail_threshold"
        assert summary.display_score == 4
        assert summary.message() == "Game Over! You survived 1.5 seconds with a score of 4."

    def test_input_released_on_game_over(self, calm_game):
        calm_game.start()
        calm_game.key_down(Direction.RIGHT)
        calm_game.body.x += 250
        calm_game.tick()
        assert calm_game.input_state.held() == frozenset()

    def test_tick_after_game_over_is_frozen(self, calm_game):
        calm_game.start()
        calm_game.body.x += 250
        calm_game.tick()
        position = calm_game.body.position
        result = calm_game.tick()
        assert result.terminated
        assert calm_game.body.position == position

    def test_holding_a_key_eventually_fails(self, game):
        game.start()
        game.key_down(Direction.RIGHT)
        for _ in range(2000):
            result = game.tick()
            if result.terminated:
                break
        assert game.phase is GamePhase.GAME_OVER
        assert game.termination_reason == "fail_threshold"

    def test_tick_cap_truncates(self, calm_config):
        config = dataclasses.replace(calm_config, caps=dataclasses.replace(calm_config.caps, max_ticks=5))
        game = CoreGame(config=config, seed=0)
        game.start()
        for _ in range(4):
            assert not game.tick().truncated
        result = game.tick()
        assert result.truncated
        assert not result.terminated
        assert result.termination_reason == "tick_cap"
        assert game.phase is GamePhase.GAME_OVER
        assert game.last_result.reason == "tick_cap"


class TestSummary:
    """GameOverSummary formatting."""

    def test_floors_score(self):
        summary = GameOverSummary(time_alive=12.345, score=30.99)
        assert summary.display_score == 30
        assert summary.message() == "Game Over! You survived 12.3 seconds with a score of 30."


class TestDeterminism:
    """Same seed and inputs reproduce the same run."""

    def test_same_seed_same_trajectory(self, config):
        a = CoreGame(config=config, seed=123)
        b = CoreGame(config=config, seed=123)
        a.start()
        b.start()
        for i in range(300):
            action = [i % 2, 0, (i // 7) % 2, 0]
            a.set_input(action)
            b.set_input(action)
            ra = a.tick()
            rb = b.tick()
            assert a.body.position == b.body.position
            assert ra.terminated == rb.terminated
            if ra.terminated:
                break
        assert a.score == b.score

    def test_reset_with_seed_replays(self, config):
        game = CoreGame(config=config, seed=5)
        game.start()
        for _ in range(100):
            game.tick()
        first = game.body.position

        game.reset(seed=5)
        game.start()
        for _ in range(100):
            game.tick()
        assert game.body.position == first


class TestExports:
    """Info and render data."""

    def test_info_keys(self, game):
        info = game.get_info()
        for key in ("score", "display_score", "time_alive", "ticks", "zone",
                    "distance", "time_in_zone", "terminated_reason"):
            assert key in info
        assert set(info["time_in_zone"]) == {"safe", "caution", "danger"}

    def test_render_data_waiting(self, game):
        data = game.get_render_data()
        assert data["started"] is False
        assert data["game_over"] is False
        assert data["score_text"] == "Score: 0"
        assert data["time_text"] == "Time: 0.0 s"
        assert data["game_over_message"] == ""

    def test_render_data_running(self, game):
        game.start()
        game.tick()
        data = game.get_render_data()
        assert data["started"] is True
        assert data["phase"] == "running"
        assert (data["center_x"], data["center_y"]) == (300.0, 300.0)
        assert data["player_radius"] == 10
