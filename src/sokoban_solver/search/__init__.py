"""Search algorithms for the Sokoban solver.

This module implements push-count A* search with a Manhattan assignment
heuristic and corner deadlock pruning.
"""

from .heuristics import INFEASIBLE, HeuristicResult, SokobanHeuristic, create_heuristic
from .moves import MoveGenerator, Transition, replay_moves
from .node import SearchNode
from .astar import AStarSearcher, SearchResult, SearchConfig, create_astar_searcher, solve

__all__ = [
    'INFEASIBLE',
    'HeuristicResult',
    'SokobanHeuristic',
    'create_heuristic',
    'MoveGenerator',
    'Transition',
    'replay_moves',
    'SearchNode',
    'AStarSearcher',
    'SearchResult',
    'SearchConfig',
    'create_astar_searcher',
    'solve'
]
