"""
Unit tests for Cell class.

Tests cell state management, reveal/flag behavior, and observation conversion.
"""
import pytest
from cubesweeper.game import Cell, CellState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_hidden_safe_and_uncounted(self) -> None:
        """New cell is hidden, not a mine, with no neighbouring mines."""
        cell = Cell()
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True
        assert cell.is_mine is False
        assert cell.neighbor_mines == 0

    def test_cell_keeps_coordinates(self) -> None:
        """Cell exposes its coordinates as a position tuple."""
        cell = Cell(1, 2, 3)
        assert cell.position == (1, 2, 3)


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell succeeds and changes its state."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_already_revealed_returns_false(
        self, hidden_cell: Cell
    ) -> None:
        """Revealing an already revealed cell should fail."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot reveal a flagged cell."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True

    def test_force_reveal_drops_flag(self, mine_cell: Cell) -> None:
        """Forced reveal of a flagged mine leaves it revealed, not flagged."""
        mine_cell.toggle_flag()
        mine_cell.force_reveal()
        assert mine_cell.is_revealed is True
        assert mine_cell.is_flagged is False


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_hidden_cell(self, hidden_cell: Cell) -> None:
        """Flagging a hidden cell succeeds."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.state == CellState.FLAGGED

    def test_unflag_returns_to_hidden(self, hidden_cell: Cell) -> None:
        """Unflagging a cell should return it to hidden."""
        hidden_cell.toggle_flag()
        hidden_cell.toggle_flag()
        assert hidden_cell.is_hidden is True

    def test_flag_revealed_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot flag a revealed cell."""
        hidden_cell.reveal()
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_revealed is True


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell observation values for agents."""

    def test_hidden_cell_observation(self, hidden_cell: Cell) -> None:
        assert hidden_cell.to_observation() == -1

    def test_flagged_cell_observation(self, hidden_cell: Cell) -> None:
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    @pytest.mark.parametrize("count", [0, 1, 9, 26])
    def test_revealed_cell_observation_matches_count(self, count: int) -> None:
        """Revealed cell returns its neighbour mine count."""
        cell = Cell(neighbor_mines=count)
        cell.reveal()
        assert cell.to_observation() == count

    def test_revealed_mine_observation(self, mine_cell: Cell) -> None:
        """Revealed mine is one above the largest count."""
        mine_cell.reveal()
        assert mine_cell.to_observation() == 27
