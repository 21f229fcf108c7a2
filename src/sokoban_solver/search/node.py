"""Search tree node for the A* engine."""

from dataclasses import dataclass
from typing import List, Optional

from sokoban_solver.core.board import Board
from sokoban_solver.core.data_models import Direction


@dataclass(eq=False)
class SearchNode:
    """Node in the A* search tree.

    Nodes form a tree through ``parent`` links that are set once at creation.
    ``h`` stays ``None`` until the search engine scores the node.
    """
    board: Board
    g: int = 0  # pushes from the start
    h: Optional[float] = None
    parent: Optional['SearchNode'] = None
    move: Optional[Direction] = None
    pushed: bool = False
    depth: int = 0

    @property
    def f(self) -> Optional[float]:
        """Total estimated cost f(n) = g(n) + h(n), or None before scoring."""
        if self.h is None:
            return None
        return self.g + self.h

    def path(self) -> List['SearchNode']:
        """Return the nodes from the root to this node (inclusive)."""
        nodes = []
        node: Optional[SearchNode] = self
        while node is not None:
            nodes.append(node)
            node = node.parent
        nodes.reverse()
        return nodes

    def get_move_sequence(self) -> List[Direction]:
        """Directions taken from the root to reach this node."""
        return [node.move for node in self.path() if node.move is not None]

    def get_lurd(self) -> str:
        """Move sequence in LURD notation: lowercase walks, uppercase pushes."""
        letters = []
        for node in self.path():
            if node.move is None:
                continue
            letters.append(node.move.code if node.pushed else node.move.code.lower())
        return "".join(letters)
