"""
Logic-based agent for 3D Minesweeper.

Uses constraint propagation over the 26-cell neighbourhood to make
deductions without guessing when possible. The same deductions back
advise(), which reads nothing but a board snapshot.
"""
import random
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

import numpy as np

from ..game.board import GameStatus, NEIGHBOR_OFFSETS
from ..game.cell import FLAGGED_VALUE, HIDDEN_VALUE, MINE_VALUE
from ..game.snapshot import Snapshot, observation_from_snapshot
from .base_agent import BaseAgent

Position = Tuple[int, int, int]


# ============================================================================
# Constraint Types
# ============================================================================

@dataclass(frozen=True)
class Constraint:
    """
    A constraint representing: sum of cells in 'cells' == mine_count.

    For example, if a revealed "2" has 3 hidden neighbors and 0 flagged,
    the constraint is: cells={A, B, C}, mine_count=2
    """

    cells: FrozenSet[Position]
    mine_count: int


@dataclass
class CellInfo:
    """Information about a revealed cell for constraint analysis."""

    position: Position
    neighbor_mines: int
    hidden_neighbors: Set[Position]
    flagged_neighbors: Set[Position]

    @property
    def remaining_mines(self) -> int:
        """Mines still to be found among hidden neighbors."""
        return self.neighbor_mines - len(self.flagged_neighbors)


@dataclass(frozen=True)
class Advice:
    """Cells that are certainly safe or certainly mined."""

    safe: FrozenSet[Position] = field(default_factory=frozenset)
    mines: FrozenSet[Position] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not self.safe and not self.mines


# ============================================================================
# Logic Agent
# ============================================================================

class LogicAgent(BaseAgent):
    """
    Agent that uses constraint propagation to pick moves.

    Strategy:
        1. Build constraints from all revealed numbered cells
        2. Propagate trivial rules (0 remaining -> safe, all remaining -> mines)
        3. Apply subset reduction for advanced deductions
        4. If no certain moves, estimate mine probabilities and pick safest
        5. Prefer a corner for the first move (7 neighbours, best cascade odds)
    """

    def __init__(self, size: int = 4, seed: Optional[int] = None) -> None:
        """
        Initialize the logic agent.

        Args:
            size: Edge length of the cube.
            seed: Seed for the first-move corner choice.
        """
        super().__init__(size)
        self._rng = random.Random(seed)
        self._first_move = True

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select the best action using constraint propagation.

        Args:
            observation: 3D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Best action index based on analysis.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = [int(index) for index in np.flatnonzero(valid_actions)]

        if not valid_indices:
            return 0

        if self._first_move:
            self._first_move = False
            return self._select_first_move(valid_indices)

        safe_cells, mine_cells = self._solve_constraints(observation)

        valid_set = set(valid_indices)
        for position in sorted(safe_cells):
            action = self.position_to_action(*position)
            if action in valid_set:
                return action

        return self._select_by_probability(observation, valid_indices, mine_cells)

    def advise(self, snapshot: Snapshot) -> Advice:
        """
        Deduce certain moves from a snapshot.

        Only the visible cells of the snapshot are used. Returns empty
        advice unless the game is in progress.
        """
        if snapshot.status != GameStatus.PLAYING:
            return Advice()
        observation = observation_from_snapshot(snapshot)
        safe_cells, mine_cells = self._solve_constraints(observation)
        return Advice(safe=frozenset(safe_cells), mines=frozenset(mine_cells))

    def _select_first_move(self, valid_indices: List[int]) -> int:
        """Select a random corner for the first move."""
        last = self.size - 1
        corners = [
            self.position_to_action(x, y, z)
            for x in (0, last) for y in (0, last) for z in (0, last)
        ]
        self._rng.shuffle(corners)
        for corner in corners:
            if corner in valid_indices:
                return corner
        return self._rng.choice(valid_indices)

    # ========================================================================
    # Constraint Propagation
    # ========================================================================

    def _numbered_cells(self, observation: np.ndarray) -> List[Position]:
        """Revealed cells showing a count between 1 and 26."""
        mask = (observation > 0) & (observation < MINE_VALUE)
        return [tuple(int(v) for v in index) for index in np.argwhere(mask)]

    def _build_constraints(self, observation: np.ndarray) -> List[Constraint]:
        """
        Build constraints from revealed numbered cells.

        Each revealed number N with hidden neighbors creates a constraint:
        "exactly (N - flagged_count) of these hidden cells are mines"
        """
        constraints = []

        for position in self._numbered_cells(observation):
            info = self._get_cell_info(observation, position)

            if not info.hidden_neighbors:
                continue
            # Inconsistent with the flags placed; ignore
            if not 0 <= info.remaining_mines <= len(info.hidden_neighbors):
                continue

            constraints.append(Constraint(
                cells=frozenset(info.hidden_neighbors),
                mine_count=info.remaining_mines,
            ))

        return constraints

    def _solve_constraints(
        self, observation: np.ndarray
    ) -> Tuple[Set[Position], Set[Position]]:
        """
        Propagate constraints to a fixpoint.

        Returns:
            Tuple of (safe_cells, mine_cells) sets.
        """
        safe_cells: Set[Position] = set()
        mine_cells: Set[Position] = set()

        constraints = self._build_constraints(observation)

        changed = True
        iterations = 0
        max_iterations = 100

        while changed and iterations < max_iterations:
            changed = False
            iterations += 1

            new_constraints = []
            for constraint in constraints:
                remaining_cells = constraint.cells - safe_cells - mine_cells
                remaining_mines = (
                    constraint.mine_count - len(constraint.cells & mine_cells)
                )

                if not remaining_cells:
                    continue

                if remaining_mines == 0:
                    safe_cells.update(remaining_cells)
                    changed = True
                    continue

                if remaining_mines == len(remaining_cells):
                    mine_cells.update(remaining_cells)
                    changed = True
                    continue

                new_constraints.append(Constraint(
                    cells=frozenset(remaining_cells),
                    mine_count=remaining_mines,
                ))

            subset_safe, subset_mines, constraints = self._subset_reduction(
                new_constraints
            )
            subset_safe -= safe_cells
            subset_mines -= mine_cells
            if subset_safe or subset_mines:
                safe_cells.update(subset_safe)
                mine_cells.update(subset_mines)
                changed = True

        return safe_cells, mine_cells

    def _subset_reduction(
        self, constraints: List[Constraint]
    ) -> Tuple[Set[Position], Set[Position], List[Constraint]]:
        """
        Apply subset reduction to find additional deductions.

        If constraint A's cells are a subset of constraint B's cells,
        the difference (B - A) holds (B.mines - A.mines) mines.

        Example:
            A: {X, Y} has 1 mine
            B: {X, Y, Z} has 1 mine
            -> Z must be safe
        """
        safe_cells: Set[Position] = set()
        mine_cells: Set[Position] = set()
        new_constraints: List[Constraint] = []

        for i, c1 in enumerate(constraints):
            for c2 in constraints[i + 1:]:
                if c1.cells < c2.cells:
                    small, large = c1, c2
                elif c2.cells < c1.cells:
                    small, large = c2, c1
                else:
                    continue

                diff_cells = large.cells - small.cells
                diff_mines = large.mine_count - small.mine_count

                if diff_mines == 0:
                    safe_cells.update(diff_cells)
                elif diff_mines == len(diff_cells):
                    mine_cells.update(diff_cells)
                elif 0 < diff_mines < len(diff_cells):
                    new_constraints.append(Constraint(
                        cells=frozenset(diff_cells),
                        mine_count=diff_mines,
                    ))

        # Deduplicate constraints, keeping order
        result_constraints = list(dict.fromkeys(constraints + new_constraints))

        return safe_cells, mine_cells, result_constraints

    def _get_cell_info(
        self, observation: np.ndarray, position: Position
    ) -> CellInfo:
        """Get analysis info for a revealed cell."""
        x, y, z = position
        hidden_neighbors: Set[Position] = set()
        flagged_neighbors: Set[Position] = set()

        for dx, dy, dz in NEIGHBOR_OFFSETS:
            neighbor = (x + dx, y + dy, z + dz)
            if not all(0 <= v < self.size for v in neighbor):
                continue
            value = observation[neighbor]
            if value == HIDDEN_VALUE:
                hidden_neighbors.add(neighbor)
            elif value == FLAGGED_VALUE:
                flagged_neighbors.add(neighbor)

        return CellInfo(
            position=position,
            neighbor_mines=int(observation[position]),
            hidden_neighbors=hidden_neighbors,
            flagged_neighbors=flagged_neighbors,
        )

    # ========================================================================
    # Probability Fallback
    # ========================================================================

    def _select_by_probability(
        self,
        observation: np.ndarray,
        valid_indices: List[int],
        known_mines: Set[Position],
    ) -> int:
        """Select the cell with lowest estimated mine probability."""
        probabilities = self._estimate_mine_probabilities(observation, known_mines)

        best_action = valid_indices[0]
        best_prob = 1.0

        for action in valid_indices:
            position = self.action_to_position(action)

            if position in known_mines:
                continue

            prob = probabilities.get(position, 0.5)
            if prob < best_prob:
                best_prob = prob
                best_action = action

        return best_action

    def _estimate_mine_probabilities(
        self,
        observation: np.ndarray,
        known_mines: Set[Position],
    ) -> Dict[Position, float]:
        """
        Estimate mine probability for each constrained hidden cell.

        Returns:
            Dict mapping (x, y, z) to probability of being a mine.
        """
        probabilities: Dict[Position, List[float]] = defaultdict(list)

        for position in self._numbered_cells(observation):
            info = self._get_cell_info(observation, position)

            unknown_neighbors = info.hidden_neighbors - known_mines
            remaining = (
                info.remaining_mines - len(info.hidden_neighbors & known_mines)
            )

            if not unknown_neighbors or remaining < 0:
                continue

            prob = remaining / len(unknown_neighbors)
            for neighbor in unknown_neighbors:
                probabilities[neighbor].append(prob)

        # Most conservative estimate per cell
        return {cell: max(probs) for cell, probs in probabilities.items()}

    def reset(self) -> None:
        """Reset for new game."""
        self._first_move = True
