"""CLI command implementations."""

import logging
from typing import Any, Dict, List, Optional

from sokoban_solver.config import (
    ConfigManager, ConfigValidationError, clear_config, get_parameter, validate_config
)
from sokoban_solver.core.board import Board, InvalidBoardError
from sokoban_solver.integration.io import load_board
from sokoban_solver.integration.levels import LEVELS, get_level, get_level_names
from sokoban_solver.search.astar import AStarSearcher, SearchConfig, SearchResult

from .utils import apply_config_log_level, format_board, format_result, save_results

logger = logging.getLogger(__name__)

EXIT_SOLVED = 0
EXIT_ERROR = 1
EXIT_UNSOLVED = 2


def _config_overrides(args) -> List[str]:
    """Hydra overrides from the global --config flag."""
    if not getattr(args, 'config', None):
        return []
    return [item.strip() for item in args.config.split(',') if item.strip()]


def _flag_updates(args) -> Dict[str, Any]:
    """Typed config updates from the search flags of solve/demo."""
    updates: Dict[str, Any] = {}
    if getattr(args, 'max_nodes', None) is not None:
        updates['search.max_nodes_expanded'] = args.max_nodes
    if getattr(args, 'tie_break', None):
        updates['search.tie_break'] = args.tie_break
    if getattr(args, 'assignment', None):
        updates['heuristics.assignment'] = args.assignment
    return updates


def load_cli_config(args) -> Optional[ConfigManager]:
    """Load the project configuration with the command's overrides applied.

    Returns None, after clearing any global configuration, when the project
    has no conf directory; built-in defaults apply then.

    Raises:
        ConfigValidationError: If the resulting configuration is invalid
    """
    try:
        manager = ConfigManager()
    except FileNotFoundError as e:
        logger.warning(f"{e}; using built-in defaults")
        clear_config()
        return None

    manager.load_config(overrides=_config_overrides(args))
    updates = _flag_updates(args)
    if updates:
        manager.update_config(updates)
    apply_config_log_level(manager.config, args)
    return manager


def _search_config(args, manager: Optional[ConfigManager]) -> SearchConfig:
    if manager is not None:
        return SearchConfig.from_config(manager.config)
    # Keys of the flag updates end in SearchConfig field names
    return SearchConfig(**{key.rsplit('.', 1)[-1]: value
                           for key, value in _flag_updates(args).items()})


def _symbols(args) -> str:
    return getattr(args, 'symbols', None) or str(get_parameter('io.symbols', default='xsb'))


def _report(name: str, board: Board, result: SearchResult, symbols: str, show_final: bool) -> Dict[str, Any]:
    for line in format_result(name, result):
        print(line)
    if show_final and result.final_board is not None:
        print(format_board(result.final_board, symbols))
    entry = result.to_dict()
    entry['name'] = name
    entry['board'] = format_board(board, symbols).split("\n")
    return entry


def solve_command(args) -> int:
    """Solve one level from a level file."""
    try:
        manager = load_cli_config(args)
        symbols = _symbols(args)
        board = load_board(args.level_file, index=args.index, symbols=symbols)
        searcher = AStarSearcher(_search_config(args, manager))
    except (FileNotFoundError, IndexError, InvalidBoardError, ConfigValidationError, ValueError) as e:
        logger.error(str(e))
        return EXIT_ERROR

    print(format_board(board, symbols))
    result = searcher.search(board)
    entry = _report(f"{args.level_file}#{args.index}", board, result, symbols, args.show_final)

    if getattr(args, 'output', None):
        save_results({'results': [entry]}, args.output)
        logger.info(f"Results saved to {args.output}")

    return EXIT_SOLVED if result.success else EXIT_UNSOLVED


def demo_command(args) -> int:
    """Solve built-in levels and print a summary for each."""
    names = args.levels or get_level_names()
    try:
        manager = load_cli_config(args)
        searcher = AStarSearcher(_search_config(args, manager))
        boards = [(name, get_level(name)) for name in names]
    except (KeyError, InvalidBoardError, ConfigValidationError, ValueError) as e:
        logger.error(str(e))
        return EXIT_ERROR

    entries = []
    all_solved = True
    for name, board in boards:
        print(f"--- {name} ---")
        # Built-in levels carry their own glyph set
        symbols = LEVELS[name][0]
        print(format_board(board, symbols))
        result = searcher.search(board)
        entries.append(_report(name, board, result, symbols, args.show_final))
        all_solved = all_solved and result.success
        print()

    if getattr(args, 'output', None):
        save_results({'results': entries}, args.output)
        logger.info(f"Results saved to {args.output}")

    return EXIT_SOLVED if all_solved else EXIT_UNSOLVED


def config_command(args) -> int:
    """Show or validate the configuration."""
    action = getattr(args, 'config_action', None) or 'show'
    try:
        manager = ConfigManager()
        manager.load_config(overrides=_config_overrides(args), validate=False)
    except FileNotFoundError as e:
        logger.error(str(e))
        return EXIT_ERROR

    if action == 'show':
        print(manager.to_yaml())
        return EXIT_SOLVED

    if action == 'validate':
        try:
            validate_config(manager.config)
        except ConfigValidationError as e:
            print(f"Configuration invalid: {e}")
            return EXIT_ERROR
        print("Configuration is valid")
        return EXIT_SOLVED

    logger.error(f"Unknown config action: {action}")
    return EXIT_ERROR
