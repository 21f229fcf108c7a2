"""Tests for A* search algorithm."""

import pytest
from omegaconf import OmegaConf

from sokoban_solver.core.board import InvalidBoardError
from sokoban_solver.core.data_models import Direction
from sokoban_solver.integration.io import parse_board
from sokoban_solver.integration.levels import get_level
from sokoban_solver.search.astar import (
    AStarSearcher, SearchConfig, SearchResult, create_astar_searcher, solve
)
from sokoban_solver.search.heuristics import INFEASIBLE
from sokoban_solver.search.moves import replay_moves
from sokoban_solver.search.node import SearchNode


ONE_PUSH = [
    "#####",
    "#   #",
    "#@$.#",
    "#   #",
    "#####",
]

ALREADY_SOLVED = [
    "#####",
    "#*  #",
    "#  @#",
    "#####",
]

DEAD_START = [
    "######",
    "#$#  #",
    "##  .#",
    "#  @ #",
    "######",
]

NO_BOXES = [
    "####",
    "#+ #",
    "####",
]

EQUAL_F = [
    "######",
    "#    #",
    "#  $.#",
    "# @  #",
    "######",
]


@pytest.fixture
def searcher():
    return AStarSearcher(SearchConfig())


class TestSearchConfig:
    """Test SearchConfig validation and loading."""

    def test_defaults(self):
        config = SearchConfig()
        assert config.max_nodes_expanded == 500_000
        assert config.tie_break == 'low_g'
        assert config.assignment == 'exhaustive'

    def test_invalid_budget(self):
        with pytest.raises(ValueError):
            SearchConfig(max_nodes_expanded=0)

    def test_invalid_tie_break(self):
        with pytest.raises(ValueError):
            SearchConfig(tie_break='random')

    def test_from_config(self):
        cfg = OmegaConf.create({
            'search': {'max_nodes_expanded': 50, 'tie_break': 'high_g', 'progress_interval': 0},
            'heuristics': {'assignment': 'hungarian', 'max_exhaustive_boxes': 3},
        })
        config = SearchConfig.from_config(cfg)
        assert config.max_nodes_expanded == 50
        assert config.tie_break == 'high_g'
        assert config.progress_interval == 0
        assert config.assignment == 'hungarian'
        assert config.max_exhaustive_boxes == 3

    def test_from_partial_config(self):
        config = SearchConfig.from_config(OmegaConf.create({'search': {'max_nodes_expanded': 7}}))
        assert config.max_nodes_expanded == 7
        assert config.tie_break == 'low_g'
        assert config.assignment == 'exhaustive'

    def test_unknown_assignment_rejected_by_searcher(self):
        with pytest.raises(ValueError):
            AStarSearcher(SearchConfig(assignment='greedy'))


class TestScenarios:
    """End-to-end search scenarios."""

    def test_single_push(self, searcher):
        """One box next to the player, target right behind it."""
        board = parse_board(ONE_PUSH)
        result = searcher.search(board)

        assert result.success
        assert result.pushes == 1
        assert result.moves == [Direction.RIGHT]
        assert result.move_string == "R"
        assert result.lurd == "R"
        assert result.termination_reason == "goal_reached"
        assert result.nodes_explored <= 20
        assert result.final_board.is_goal()

    def test_start_is_goal(self, searcher):
        """A solved board is recognized at the root without expansion."""
        result = searcher.search(parse_board(ALREADY_SOLVED))

        assert result.success
        assert result.pushes == 0
        assert result.moves == []
        assert result.lurd == ""
        assert result.nodes_explored == 1

    def test_dead_start(self, searcher):
        """A wedged box makes every state infeasible, so the search exhausts."""
        result = searcher.search(parse_board(DEAD_START))

        assert not result.success
        assert result.termination_reason == "search_exhausted"
        assert result.nodes_explored == 1
        assert result.moves == []
        assert result.statistics['deadlocks_pruned'] == 3
        assert result.statistics['initial_heuristic'] == INFEASIBLE

    def test_no_boxes_never_solved(self, searcher):
        """A board without boxes has no goal; the reachable states run out."""
        result = searcher.search(parse_board(NO_BOXES))

        assert not result.success
        assert result.termination_reason == "search_exhausted"
        assert result.nodes_explored == 2

    def test_two_pushes(self, searcher):
        board = get_level("two-push")
        result = searcher.search(board)

        assert result.success
        assert result.pushes == 2
        # Uppercase letters mark pushes
        assert sum(1 for letter in result.lurd if letter.isupper()) == result.pushes

    def test_two_boxes(self, searcher):
        result = searcher.search(get_level("two-boxes"))
        assert result.success
        assert result.pushes == 2
        assert result.final_board.is_goal()

    def test_node_budget(self):
        searcher = AStarSearcher(SearchConfig(max_nodes_expanded=1))
        result = searcher.search(get_level("two-push"))

        assert not result.success
        assert result.termination_reason == "max_nodes_reached"
        assert result.nodes_explored == 1


class TestSearchProperties:
    """Properties that hold for every search."""

    def test_replay_reaches_final_board(self, searcher):
        """Replaying the returned moves reproduces the goal board."""
        board = get_level("two-boxes")
        result = searcher.search(board)

        final = replay_moves(board, result.moves)
        assert final == result.final_board
        assert final.is_goal()

    def test_idempotent(self, searcher):
        """Searching the same board twice gives the same answer."""
        board = get_level("two-push")
        first = searcher.search(board)
        second = searcher.search(board)

        assert first.pushes == second.pushes
        assert first.moves == second.moves
        assert first.nodes_explored == second.nodes_explored

    def test_initial_heuristic_is_root_f(self, searcher):
        board = parse_board(ONE_PUSH)
        result = searcher.search(board)
        expected = searcher.heuristic.compute(board, board.target_positions()).value
        assert result.statistics['initial_heuristic'] == expected == 2

    def test_hungarian_matches_exhaustive(self):
        """Both matching methods give the same estimates, hence the same search."""
        for name in ("two-push", "two-boxes"):
            board = get_level(name)
            exhaustive = AStarSearcher(SearchConfig(assignment='exhaustive')).search(board)
            hungarian = AStarSearcher(SearchConfig(assignment='hungarian')).search(board)
            assert exhaustive.moves == hungarian.moves
            assert exhaustive.nodes_explored == hungarian.nodes_explored

    def test_statistics_populated(self, searcher):
        result = searcher.search(get_level("two-push"))
        stats = result.statistics

        assert stats['nodes_explored'] == result.nodes_explored
        assert stats['nodes_generated'] >= stats['nodes_enqueued'] - 1
        assert stats['max_frontier_size'] >= 1
        assert stats['heuristic_stats']['computation_count'] >= 1


class TestTieBreak:
    """Test frontier ordering among equal f values."""

    def _node(self, g, h):
        return SearchNode(board=parse_board(ONE_PUSH), g=g, h=h)

    def test_low_g_prefers_fewer_pushes(self):
        searcher = AStarSearcher(SearchConfig(tie_break='low_g'))
        fewer = searcher._priority(self._node(1, 1))
        more = searcher._priority(self._node(2, 0))
        assert fewer < more

    def test_high_g_prefers_more_pushes(self):
        searcher = AStarSearcher(SearchConfig(tie_break='high_g'))
        fewer = searcher._priority(self._node(1, 1))
        more = searcher._priority(self._node(2, 0))
        assert more < fewer

    def test_insertion_order_breaks_remaining_ties(self, searcher):
        first = searcher._priority(self._node(1, 1))
        second = searcher._priority(self._node(1, 1))
        assert first < second

    def _expansion_order(self, searcher, board):
        """Run a search and record the player position of every expanded board."""
        expanded = []
        successors = searcher.move_generator.successors

        def recording(node):
            expanded.append(node.board.player)
            return successors(node)

        searcher.move_generator.successors = recording
        return expanded, searcher.search(board)

    def test_equal_f_pop_order(self):
        """After the first walk, a walk (g=0) and the goal push (g=1) share f=2."""
        board = parse_board(EQUAL_F)
        low_order, low = self._expansion_order(AStarSearcher(SearchConfig(tie_break='low_g')), board)
        high_order, high = self._expansion_order(AStarSearcher(SearchConfig(tie_break='high_g')), board)

        # low_g expands the other walk before popping the push
        assert low_order == [(3, 2), (2, 2), (3, 3)]
        assert low.nodes_explored == 4
        # high_g pops the push right away
        assert high_order == [(3, 2), (2, 2)]
        assert high.nodes_explored == 3

        assert low.success and high.success
        assert low.lurd == high.lurd == "uR"


class TestHelpers:
    """Test module level helpers."""

    def test_create_astar_searcher(self):
        searcher = create_astar_searcher(max_nodes_expanded=10, tie_break='high_g', assignment='hungarian')
        assert searcher.config.max_nodes_expanded == 10
        assert searcher.config.tie_break == 'high_g'
        assert searcher.heuristic.assignment == 'hungarian'

    def test_solve_from_rows(self):
        result = solve(ONE_PUSH, config=SearchConfig())
        assert isinstance(result, SearchResult)
        assert result.pushes == 1

    def test_solve_rejects_bad_board(self):
        with pytest.raises(InvalidBoardError):
            solve(["#####", "# $.#", "#####"], config=SearchConfig())

    def test_default_config_without_loaded_config(self):
        searcher = AStarSearcher()
        assert searcher.config == SearchConfig()

    def test_result_to_dict(self, searcher):
        data = searcher.search(parse_board(ONE_PUSH)).to_dict()
        assert data['success'] is True
        assert data['moves'] == ['R']
        assert data['lurd'] == 'R'
        assert data['pushes'] == 1
        assert data['termination_reason'] == 'goal_reached'
        assert 'deadlocks_pruned' in data['statistics']

    def test_search_stats(self, searcher):
        searcher.search(parse_board(ONE_PUSH))
        stats = searcher.get_search_stats()
        assert stats['config']['tie_break'] == 'low_g'
        assert stats['nodes_explored'] >= 1
