"""
Unit tests for agents.

Tests random selection, logic deductions and snapshot advice.
"""
import numpy as np
import pytest

from cubesweeper.agents import Advice, LogicAgent, RandomAgent
from cubesweeper.game import Board, Snapshot, take_snapshot


@pytest.fixture
def opened_walled_board(walled_board: Board) -> Board:
    """Walled board with the left half and the (3, 0, 0) corner revealed."""
    walled_board.reveal(0, 0, 0)
    walled_board.reveal(3, 0, 0)
    return walled_board


class TestRandomAgent:
    """Test the random baseline."""

    def test_picks_only_valid_action(self) -> None:
        agent = RandomAgent(4, seed=0)
        mask = np.zeros(64, dtype=bool)
        mask[5] = True
        assert agent.select_action(np.full((4, 4, 4), -1), mask) == 5

    def test_uses_observation_when_no_mask(self) -> None:
        agent = RandomAgent(2, seed=0)
        obs = np.zeros((2, 2, 2), dtype=np.int8)
        obs[1, 1, 1] = -1
        assert agent.select_action(obs) == 7

    def test_no_valid_actions_returns_zero(self) -> None:
        agent = RandomAgent(2, seed=0)
        assert agent.select_action(np.zeros((2, 2, 2)), np.zeros(8, dtype=bool)) == 0


class TestLogicAgent:
    """Test constraint-based play."""

    def test_position_roundtrip(self) -> None:
        agent = LogicAgent(4)
        assert agent.action_to_position(agent.position_to_action(3, 1, 2)) == (3, 1, 2)

    def test_first_move_is_corner(self) -> None:
        agent = LogicAgent(4, seed=1)
        action = agent.select_action(np.full((4, 4, 4), -1, dtype=np.int8))
        assert all(v in (0, 3) for v in agent.action_to_position(action))

    def test_reveals_deduced_safe_cell(self, opened_walled_board: Board) -> None:
        agent = LogicAgent(4, seed=1)
        agent.select_action(np.full((4, 4, 4), -1, dtype=np.int8))

        action = agent.select_action(opened_walled_board.get_observation())

        assert agent.action_to_position(action) in {(3, 0, 1), (3, 1, 0), (3, 1, 1)}

    def test_reset_restores_first_move(self) -> None:
        agent = LogicAgent(4, seed=1)
        hidden = np.full((4, 4, 4), -1, dtype=np.int8)
        agent.select_action(hidden)
        agent.reset()
        action = agent.select_action(hidden)
        assert all(v in (0, 3) for v in agent.action_to_position(action))


class TestAdvice:
    """Test snapshot-only advice."""

    def test_advice_finds_safe_cells_and_mines(self, opened_walled_board: Board) -> None:
        advice = LogicAgent(4).advise(take_snapshot(opened_walled_board))

        assert advice.safe == {(3, 0, 1), (3, 1, 0), (3, 1, 1)}
        assert advice.mines == {(2, y, z) for y in range(4) for z in range(4)}

    def test_advice_respects_flags(self, walled_board: Board) -> None:
        walled_board.reveal(0, 0, 0)
        walled_board.flag(2, 0, 0)
        advice = LogicAgent(4).advise(take_snapshot(walled_board))
        assert (2, 0, 0) not in advice.mines
        assert (2, 0, 1) in advice.mines

    def test_no_advice_on_fresh_board(self, easy_board: Board) -> None:
        assert LogicAgent(4).advise(take_snapshot(easy_board)).is_empty

    def test_no_advice_after_game_end(self, walled_board: Board) -> None:
        walled_board.reveal(2, 0, 0)
        assert LogicAgent(4).advise(take_snapshot(walled_board)) == Advice()

    def test_no_advice_when_idle(self) -> None:
        assert LogicAgent(4).advise(Snapshot()).is_empty
