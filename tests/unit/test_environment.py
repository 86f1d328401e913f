"""
Unit tests for CubeSweeperEnv.

Tests spaces, rewards, termination, action masks and rendering.
"""
import numpy as np
import pytest

from cubesweeper.game import Board, BoardConfig, CubeSweeperEnv, Difficulty


@pytest.fixture
def env() -> CubeSweeperEnv:
    return CubeSweeperEnv(config=Difficulty.EASY, render_mode="ansi", seed=0)


class TestSpaces:
    """Test observation and action spaces."""

    def test_spaces_match_board(self, env: CubeSweeperEnv) -> None:
        assert env.observation_space.shape == (4, 4, 4)
        assert env.action_space.n == 64

    def test_reset_observation_all_hidden(self, env: CubeSweeperEnv) -> None:
        obs, info = env.reset(seed=1)
        assert obs.shape == (4, 4, 4)
        assert np.all(obs == -1)
        assert env.observation_space.contains(obs)
        assert info["game_state"] == "PLAYING"
        assert info["total_safe"] == 58

    def test_action_position_roundtrip(self, env: CubeSweeperEnv) -> None:
        assert env.position_to_action(1, 2, 3) == 27
        assert env.action_to_position(27) == (1, 2, 3)

    def test_custom_config(self) -> None:
        env = CubeSweeperEnv(config=BoardConfig(3, 2))
        assert env.action_space.n == 27


class TestStep:
    """Test rewards and termination."""

    def test_safe_reveal_rewarded(self, env: CubeSweeperEnv, walled_board: Board) -> None:
        env.reset()
        env.engine.load(walled_board)

        obs, reward, terminated, truncated, info = env.step(0)

        assert reward == 1.0
        assert terminated is False
        assert truncated is False
        assert info["revealed"] == 32
        assert obs[1, 1, 1] == 9

    def test_invalid_action_penalised(self, env: CubeSweeperEnv, walled_board: Board) -> None:
        env.reset()
        env.engine.load(walled_board)
        env.step(0)
        _, reward, terminated, _, _ = env.step(0)
        assert reward == pytest.approx(-0.1)
        assert terminated is False

    def test_mine_ends_episode(self, env: CubeSweeperEnv, walled_board: Board) -> None:
        env.reset()
        env.engine.load(walled_board)
        _, reward, terminated, _, info = env.step(env.position_to_action(2, 0, 0))
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"

    def test_win_ends_episode(self, env: CubeSweeperEnv) -> None:
        env.reset()
        env.engine.load(Board.from_mines(4, [(3, 3, 3)]))
        _, reward, terminated, _, info = env.step(0)
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_reset_starts_new_game(self, env: CubeSweeperEnv, walled_board: Board) -> None:
        env.engine.load(walled_board)
        env.step(0)
        obs, info = env.reset()
        assert env.board is not walled_board
        assert np.all(obs == -1)
        assert info["steps"] == 0


class TestActionMaskAndRender:
    """Test helper outputs."""

    def test_action_mask_tracks_hidden_cells(
        self, env: CubeSweeperEnv, walled_board: Board
    ) -> None:
        env.reset()
        assert env.get_action_mask().sum() == 64
        env.engine.load(walled_board)
        env.step(0)
        mask = env.get_action_mask()
        assert mask.dtype == bool
        assert mask.sum() == 32
        assert mask[0] == False  # noqa: E712

    def test_render_ansi_shows_layers(self, env: CubeSweeperEnv, walled_board: Board) -> None:
        env.reset()
        env.engine.load(walled_board)
        env.step(0)
        text = env.render()
        assert "z=0" in text and "z=3" in text
        assert "9" in text
        assert "." in text

    def test_render_without_mode_returns_none(self) -> None:
        env = CubeSweeperEnv()
        assert env.render() is None
