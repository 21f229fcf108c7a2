"""Push-count heuristic for A* search.

The estimate for a board is

    h = min-cost matching of boxes to targets (Manhattan distance)
        + Manhattan distance from the player to the nearest box

unless some box is wedged in a corner, in which case the board is infeasible
and ``INFEASIBLE`` is returned so the search can prune it.

The matching is found by exhaustive enumeration of assignments by default.
That is exponential in the number of boxes and only meant for small puzzles;
the ``hungarian`` method computes the same minimum in polynomial time with
``scipy.optimize.linear_sum_assignment``.
"""

import itertools
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Collection, Dict, List, Sequence

import numpy as np
from scipy.optimize import linear_sum_assignment

from sokoban_solver.core.board import Board
from sokoban_solver.core.data_models import Cell, Position

logger = logging.getLogger(__name__)

INFEASIBLE = float('inf')

ASSIGNMENT_METHODS = ('exhaustive', 'hungarian')

# (wall side A, wall side B): a box against both walls of a corner is dead
# when the two opposite neighbours are blocked too.
_CORNER_PATTERNS = (
    ((0, -1), (-1, 0)),  # left + up
    ((0, 1), (-1, 0)),   # right + up
    ((0, -1), (1, 0)),   # left + down
    ((0, 1), (1, 0)),    # right + down
)


@dataclass
class HeuristicResult:
    """Result from heuristic computation."""
    value: float
    computation_time: float
    deadlock: bool = False

    @property
    def infeasible(self) -> bool:
        return self.value == INFEASIBLE


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def is_corner_deadlock(board: Board, pos: Position) -> bool:
    """Check the four corner patterns for the box at ``pos``."""
    row, col = pos
    for (ar, ac), (br, bc) in _CORNER_PATTERNS:
        if board.is_wall((row + ar, col + ac)) and board.is_wall((row + br, col + bc)):
            if board.is_blocked((row - ar, col - ac)) and board.is_blocked((row - br, col - bc)):
                return True
    return False


def has_deadlock(board: Board) -> bool:
    """True when a box that is not on a target is stuck in a corner."""
    for pos in board.boxes:
        if board.cell(pos) == Cell.BOX_ON_TARGET:
            continue
        if is_corner_deadlock(board, pos):
            return True
    return False


def _distance_matrix(boxes: Sequence[Position], targets: Sequence[Position]) -> np.ndarray:
    box_arr = np.asarray(boxes, dtype=np.int64).reshape(-1, 2)
    target_arr = np.asarray(targets, dtype=np.int64).reshape(-1, 2)
    return np.abs(box_arr[:, None, :] - target_arr[None, :, :]).sum(axis=2)


def exhaustive_assignment_cost(boxes: Sequence[Position], targets: Sequence[Position]) -> float:
    """Minimum total distance over every assignment of boxes to distinct targets."""
    if not boxes:
        return 0
    if len(boxes) > len(targets):
        return INFEASIBLE

    costs = _distance_matrix(boxes, targets).tolist()
    rows = range(len(boxes))
    best = INFEASIBLE
    for chosen in itertools.permutations(range(len(targets)), len(boxes)):
        total = sum(costs[i][j] for i, j in zip(rows, chosen))
        if total < best:
            best = total
    return best


def hungarian_assignment_cost(boxes: Sequence[Position], targets: Sequence[Position]) -> float:
    """Same minimum as :func:`exhaustive_assignment_cost`, in polynomial time."""
    if not boxes:
        return 0
    if len(boxes) > len(targets):
        return INFEASIBLE

    cost_matrix = _distance_matrix(boxes, targets)
    row_indices, col_indices = linear_sum_assignment(cost_matrix)
    return int(cost_matrix[row_indices, col_indices].sum())


def player_to_box_distance(board: Board) -> int:
    """Manhattan distance from the player to the nearest box (0 without boxes)."""
    if not board.boxes:
        return 0
    return min(manhattan(board.player, box) for box in board.boxes)


class BaseHeuristic(ABC):
    """Abstract base class for heuristics."""

    def __init__(self, name: str):
        self.name = name
        self.computation_count = 0
        self.total_computation_time = 0.0

    @abstractmethod
    def compute(self, board: Board, targets: Collection[Position]) -> HeuristicResult:
        """Compute the heuristic value of ``board`` for the fixed target set."""
        pass

    def __call__(self, board: Board, targets: Collection[Position]) -> HeuristicResult:
        """Compute heuristic with statistics."""
        result = self.compute(board, targets)
        self.computation_count += 1
        self.total_computation_time += result.computation_time
        return result

    def get_stats(self) -> Dict[str, Any]:
        """Get computation statistics."""
        avg_time = (self.total_computation_time / self.computation_count
                    if self.computation_count > 0 else 0.0)

        return {
            'name': self.name,
            'computation_count': self.computation_count,
            'total_time': self.total_computation_time,
            'average_time': avg_time,
            'average_time_us': avg_time * 1000000
        }


class SokobanHeuristic(BaseHeuristic):
    """Corner deadlock pruning + box/target matching + player distance."""

    def __init__(self, assignment: str = 'exhaustive', max_exhaustive_boxes: int = 8):
        """Initialize the heuristic.

        Args:
            assignment: Matching method, ``exhaustive`` or ``hungarian``
            max_exhaustive_boxes: Box count above which exhaustive matching
                logs a scaling warning
        """
        if assignment not in ASSIGNMENT_METHODS:
            raise ValueError(
                f"assignment must be one of {ASSIGNMENT_METHODS}, got {assignment!r}"
            )
        super().__init__(f"Sokoban_{assignment}")
        self.assignment = assignment
        self.max_exhaustive_boxes = max_exhaustive_boxes
        self.deadlocks_detected = 0
        self._scaling_warned = False

    def compute(self, board: Board, targets: Collection[Position]) -> HeuristicResult:
        start_time = time.perf_counter()

        if not board.boxes or not targets:
            return HeuristicResult(value=0, computation_time=time.perf_counter() - start_time)

        if has_deadlock(board):
            self.deadlocks_detected += 1
            return HeuristicResult(
                value=INFEASIBLE,
                computation_time=time.perf_counter() - start_time,
                deadlock=True
            )

        value = self.assignment_cost(board.boxes, sorted(targets))
        if value != INFEASIBLE:
            value += player_to_box_distance(board)

        return HeuristicResult(value=value, computation_time=time.perf_counter() - start_time)

    def assignment_cost(self, boxes: Sequence[Position], targets: List[Position]) -> float:
        if self.assignment == 'hungarian':
            return hungarian_assignment_cost(boxes, targets)

        if len(boxes) > self.max_exhaustive_boxes and not self._scaling_warned:
            logger.warning(
                f"Exhaustive assignment over {len(boxes)} boxes and {len(targets)} targets "
                f"enumerates every permutation; consider heuristics.assignment=hungarian"
            )
            self._scaling_warned = True
        return exhaustive_assignment_cost(boxes, targets)

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats['deadlocks_detected'] = self.deadlocks_detected
        stats['assignment'] = self.assignment
        return stats


def create_heuristic(assignment: str = 'exhaustive', max_exhaustive_boxes: int = 8) -> SokobanHeuristic:
    """Factory function to create the search heuristic.

    Args:
        assignment: Matching method, ``exhaustive`` or ``hungarian``
        max_exhaustive_boxes: Scaling warning threshold for exhaustive matching

    Returns:
        Configured SokobanHeuristic instance
    """
    return SokobanHeuristic(assignment=assignment, max_exhaustive_boxes=max_exhaustive_boxes)
