"""Successor generation for Sokoban boards.

Every board has at most four successors, one per direction. A step into an
empty cell is free; a push moves the box ahead of the player by one cell and
costs one unit.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from sokoban_solver.core.board import Board
from sokoban_solver.core.data_models import Direction
from sokoban_solver.search.node import SearchNode


@dataclass(frozen=True)
class Transition:
    """Result of applying one player action to a board."""
    direction: Direction
    board: Board
    pushed: bool


class MoveGenerator:
    """Enumerates the legal single-step transitions from a board."""

    def __init__(self):
        self.boards_generated = 0

    def apply(self, board: Board, direction: Direction) -> Optional[Transition]:
        """Apply one action to ``board``.

        Returns:
            The resulting transition, or None when the move is illegal.
        """
        player = board.player
        ahead = direction.step(player)
        if board.is_wall(ahead):
            return None

        ahead_cell = board.cell(ahead)
        player_cell = board.cell(player)

        if ahead_cell.is_passable:
            new_board = board.with_cells({
                player: player_cell.without_occupant(),
                ahead: ahead_cell.with_player(),
            })
            self.boards_generated += 1
            return Transition(direction, new_board, pushed=False)

        if ahead_cell.is_box:
            beyond = direction.step(player, 2)
            if not board.in_bounds(beyond):
                return None
            beyond_cell = board.cell(beyond)
            if not beyond_cell.is_passable:
                return None
            new_board = board.with_cells({
                player: player_cell.without_occupant(),
                ahead: ahead_cell.without_occupant().with_player(),
                beyond: beyond_cell.with_box(),
            })
            self.boards_generated += 1
            return Transition(direction, new_board, pushed=True)

        return None

    def transitions(self, board: Board) -> Iterator[Transition]:
        """Yield the legal transitions in Up, Down, Left, Right order."""
        for direction in Direction:
            transition = self.apply(board, direction)
            if transition is not None:
                yield transition

    def successors(self, node: SearchNode) -> List[SearchNode]:
        """Wrap every legal transition from ``node`` as a child node.

        Pushes add one to ``g``; simple moves keep it. The heuristic of the
        children is left unset.
        """
        children = []
        for transition in self.transitions(node.board):
            children.append(SearchNode(
                board=transition.board,
                g=node.g + 1 if transition.pushed else node.g,
                parent=node,
                move=transition.direction,
                pushed=transition.pushed,
                depth=node.depth + 1,
            ))
        return children


def replay_moves(board: Board, moves: List[Direction]) -> Board:
    """Apply ``moves`` to ``board`` in order and return the final board.

    Raises:
        ValueError: If one of the moves is illegal at the point it is applied.
    """
    generator = MoveGenerator()
    current = board
    for index, direction in enumerate(moves):
        transition = generator.apply(current, direction)
        if transition is None:
            raise ValueError(f"Move {index} ({direction}) is illegal from {current!r}")
        current = transition.board
    return current
