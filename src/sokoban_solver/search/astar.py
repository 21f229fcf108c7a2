"""A* search algorithm for Sokoban.

Cost is measured in pushes: walking is free, each push costs one. The frontier
is a binary heap ordered by ``(f, g, insertion order)``. Stale frontier entries
are removed lazily: a board that has already been closed is skipped when it is
popped again.
"""

import heapq
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from sokoban_solver.core.board import Board
from sokoban_solver.core.data_models import Direction, Position
from sokoban_solver.search.heuristics import SokobanHeuristic, create_heuristic
from sokoban_solver.search.moves import MoveGenerator
from sokoban_solver.search.node import SearchNode

logger = logging.getLogger(__name__)

TIE_BREAKS = ('low_g', 'high_g')


@dataclass
class SearchResult:
    """Result from A* search."""
    success: bool
    moves: List[Direction] = field(default_factory=list)
    pushes: int = 0
    nodes_explored: int = 0
    computation_time: float = 0.0
    termination_reason: str = "unknown"
    lurd: str = ""
    final_board: Optional[Board] = None
    statistics: Optional[Dict[str, Any]] = None

    @property
    def move_string(self) -> str:
        """Moves as a string of U/D/L/R letters."""
        return "".join(direction.code for direction in self.moves)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to plain data."""
        return {
            'success': self.success,
            'moves': [direction.code for direction in self.moves],
            'lurd': self.lurd,
            'pushes': self.pushes,
            'nodes_explored': self.nodes_explored,
            'computation_time': self.computation_time,
            'termination_reason': self.termination_reason,
            'statistics': self.statistics or {},
        }


@dataclass
class SearchStatistics:
    """Detailed search statistics."""
    nodes_explored: int = 0
    nodes_generated: int = 0
    nodes_enqueued: int = 0
    duplicate_states: int = 0
    stale_entries: int = 0
    deadlocks_pruned: int = 0
    max_frontier_size: int = 0
    max_depth_reached: int = 0
    initial_heuristic: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            'nodes_explored': self.nodes_explored,
            'nodes_generated': self.nodes_generated,
            'nodes_enqueued': self.nodes_enqueued,
            'duplicate_states': self.duplicate_states,
            'stale_entries': self.stale_entries,
            'deadlocks_pruned': self.deadlocks_pruned,
            'max_frontier_size': self.max_frontier_size,
            'max_depth_reached': self.max_depth_reached,
            'initial_heuristic': self.initial_heuristic,
        }


@dataclass
class SearchConfig:
    """Configuration for A* search."""
    max_nodes_expanded: int = 500_000
    tie_break: str = 'low_g'  # on equal f: 'low_g' pops fewer pushes first
    assignment: str = 'exhaustive'
    max_exhaustive_boxes: int = 8
    progress_interval: int = 10_000  # log progress every N expansions, 0 disables

    def __post_init__(self) -> None:
        if self.max_nodes_expanded <= 0:
            raise ValueError(f"max_nodes_expanded must be positive, got {self.max_nodes_expanded}")
        if self.tie_break not in TIE_BREAKS:
            raise ValueError(f"tie_break must be one of {TIE_BREAKS}, got {self.tie_break!r}")

    @classmethod
    def from_config(cls, cfg: Any) -> 'SearchConfig':
        """Build a search configuration from a loaded Hydra/OmegaConf config."""
        search_cfg = cfg.get('search', {}) or {}
        heuristic_cfg = cfg.get('heuristics', {}) or {}
        defaults = cls()
        return cls(
            max_nodes_expanded=int(search_cfg.get('max_nodes_expanded', defaults.max_nodes_expanded)),
            tie_break=str(search_cfg.get('tie_break', defaults.tie_break)),
            progress_interval=int(search_cfg.get('progress_interval', defaults.progress_interval)),
            assignment=str(heuristic_cfg.get('assignment', defaults.assignment)),
            max_exhaustive_boxes=int(heuristic_cfg.get('max_exhaustive_boxes', defaults.max_exhaustive_boxes)),
        )


class AStarSearcher:
    """A* search over Sokoban boards with push-count cost."""

    def __init__(self, config: Optional[SearchConfig] = None):
        """Initialize A* searcher.

        Args:
            config: Search configuration parameters. When omitted, the global
                configuration is used if one has been loaded, else defaults.
        """
        if config is None:
            from sokoban_solver.config import get_config
            cfg = get_config()
            config = SearchConfig.from_config(cfg) if cfg is not None else SearchConfig()
        self.config = config
        self.heuristic: SokobanHeuristic = create_heuristic(
            assignment=config.assignment,
            max_exhaustive_boxes=config.max_exhaustive_boxes,
        )
        self.move_generator = MoveGenerator()
        self.statistics = SearchStatistics()
        self._counter = 0

        logger.info(f"A* searcher initialized with max_nodes={self.config.max_nodes_expanded}, "
                    f"tie_break={self.config.tie_break}, assignment={self.config.assignment}")

    def _priority(self, node: SearchNode) -> Tuple[float, int, int]:
        """Heap key: f first, then g per the tie-break rule, then FIFO."""
        self._counter += 1
        g_key = node.g if self.config.tie_break == 'low_g' else -node.g
        return (node.f, g_key, self._counter)

    def search(self, board: Board) -> SearchResult:
        """Search for a push sequence that puts every box on a target.

        Args:
            board: Starting board

        Returns:
            SearchResult with moves and statistics. An unsolved puzzle is
            reported with ``success=False``, never raised.
        """
        start_time = time.perf_counter()
        self.statistics = SearchStatistics()
        self._counter = 0

        targets: FrozenSet[Position] = board.target_positions()
        logger.info(f"Starting A* search: {board.height}x{board.width} board, "
                    f"{len(board.boxes)} boxes, {len(targets)} targets")

        root = SearchNode(board=board, g=0)
        root.h = self.heuristic(board, targets).value
        self.statistics.initial_heuristic = root.h

        open_queue: List[Tuple[Tuple[float, int, int], SearchNode]] = []
        heapq.heappush(open_queue, (self._priority(root), root))
        self.statistics.nodes_enqueued = 1
        self.statistics.max_frontier_size = 1

        closed_set: Set[Board] = set()
        best_g: Dict[Board, int] = {board: 0}
        goal_node: Optional[SearchNode] = None

        while open_queue and self.statistics.nodes_explored < self.config.max_nodes_expanded:
            _, current = heapq.heappop(open_queue)

            if current.board in closed_set:
                self.statistics.stale_entries += 1
                continue

            closed_set.add(current.board)
            self.statistics.nodes_explored += 1
            self.statistics.max_depth_reached = max(self.statistics.max_depth_reached, current.depth)

            if current.board.is_goal():
                goal_node = current
                break

            self._log_progress(current, len(open_queue))

            for successor in self.move_generator.successors(current):
                self.statistics.nodes_generated += 1
                if successor.board in closed_set:
                    self.statistics.duplicate_states += 1
                    continue

                previous_g = best_g.get(successor.board)
                if previous_g is not None and successor.g >= previous_g:
                    self.statistics.duplicate_states += 1
                    continue

                best_g[successor.board] = successor.g
                result = self.heuristic(successor.board, targets)
                if result.infeasible:
                    self.statistics.deadlocks_pruned += 1
                    continue

                successor.h = result.value
                heapq.heappush(open_queue, (self._priority(successor), successor))
                self.statistics.nodes_enqueued += 1

            self.statistics.max_frontier_size = max(self.statistics.max_frontier_size, len(open_queue))

        computation_time = time.perf_counter() - start_time

        if goal_node is not None:
            logger.info(f"Goal reached: {goal_node.g} pushes, "
                        f"{self.statistics.nodes_explored} nodes explored in {computation_time:.3f}s")
            return self._create_success_result(goal_node, computation_time)

        if not open_queue:
            termination_reason = "search_exhausted"
        else:
            termination_reason = "max_nodes_reached"
        logger.info(f"No solution found ({termination_reason}) after "
                    f"{self.statistics.nodes_explored} nodes in {computation_time:.3f}s")

        return SearchResult(
            success=False,
            nodes_explored=self.statistics.nodes_explored,
            computation_time=computation_time,
            termination_reason=termination_reason,
            statistics=self._collect_stats(),
        )

    def _log_progress(self, node: SearchNode, frontier_size: int) -> None:
        interval = self.config.progress_interval
        if interval and self.statistics.nodes_explored % interval == 0:
            logger.debug(f"Explored {self.statistics.nodes_explored} nodes, "
                         f"frontier={frontier_size}, f={node.f}, g={node.g}")

    def _create_success_result(self, node: SearchNode, computation_time: float) -> SearchResult:
        """Create successful search result by walking parent links."""
        return SearchResult(
            success=True,
            moves=node.get_move_sequence(),
            pushes=node.g,
            nodes_explored=self.statistics.nodes_explored,
            computation_time=computation_time,
            termination_reason="goal_reached",
            lurd=node.get_lurd(),
            final_board=node.board,
            statistics=self._collect_stats(),
        )

    def _collect_stats(self) -> Dict[str, Any]:
        stats = self.statistics.to_dict()
        stats['heuristic_stats'] = self.heuristic.get_stats()
        return stats

    def get_search_stats(self) -> Dict[str, Any]:
        """Get detailed search statistics."""
        return {
            'nodes_explored': self.statistics.nodes_explored,
            'nodes_generated': self.statistics.nodes_generated,
            'heuristic_stats': self.heuristic.get_stats(),
            'config': {
                'max_nodes_expanded': self.config.max_nodes_expanded,
                'tie_break': self.config.tie_break,
                'assignment': self.config.assignment,
            }
        }


def create_astar_searcher(max_nodes_expanded: int = 500_000,
                          tie_break: str = 'low_g',
                          assignment: str = 'exhaustive') -> AStarSearcher:
    """Factory function to create A* searcher with custom configuration.

    Args:
        max_nodes_expanded: Node expansion budget
        tie_break: Ordering among equal f values, ``low_g`` or ``high_g``
        assignment: Box/target matching method, ``exhaustive`` or ``hungarian``

    Returns:
        Configured AStarSearcher instance
    """
    config = SearchConfig(
        max_nodes_expanded=max_nodes_expanded,
        tie_break=tie_break,
        assignment=assignment
    )

    return AStarSearcher(config)


def solve(rows: Sequence[str], symbols: str = 'xsb',
          config: Optional[SearchConfig] = None) -> SearchResult:
    """Parse text rows and run A* search on the resulting board.

    Raises:
        InvalidBoardError: If the rows do not describe a valid board.
    """
    from sokoban_solver.integration.io import parse_board

    board = parse_board(rows, symbols=symbols)
    return AStarSearcher(config).search(board)
