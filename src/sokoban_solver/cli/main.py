"""Main CLI entry point for the Sokoban solver."""

import sys
import argparse
import logging
from typing import List, Optional

from . import commands
from .utils import setup_logging


def _add_search_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--max-nodes',
        type=int,
        help='Node expansion budget (default from config: 500000)'
    )
    parser.add_argument(
        '--assignment',
        choices=['exhaustive', 'hungarian'],
        help='Box/target matching method used by the heuristic'
    )
    parser.add_argument(
        '--tie-break',
        choices=['low_g', 'high_g'],
        help='Ordering among frontier entries with equal f'
    )
    parser.add_argument(
        '--show-final',
        action='store_true',
        help='Print the final board of each solution'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='sokoban-solver',
        description='Sokoban Solver - push-optimal A* search with deadlock pruning',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sokoban-solver solve levels.txt --index 3     # Solve the fourth level of a file
  sokoban-solver demo                           # Solve the built-in levels
  sokoban-solver demo grid1 --show-final        # Solve one built-in level
  sokoban-solver config show                    # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Comma-separated configuration overrides (e.g., search.tie_break=high_g)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Solve a level from a level file',
        description='Solve one level of a text level file'
    )
    solve_parser.add_argument(
        'level_file',
        type=str,
        help='Path to a level file (levels separated by blank lines)'
    )
    solve_parser.add_argument(
        '--index', '-i',
        type=int,
        default=0,
        help='Which level of the file to solve (default: 0)'
    )
    solve_parser.add_argument(
        '--symbols',
        choices=['xsb', 'unicode'],
        help='Glyph set of the level file (default from config: xsb)'
    )
    _add_search_options(solve_parser)

    # Demo command
    demo_parser = subparsers.add_parser(
        'demo',
        help='Solve the built-in levels',
        description='Solve built-in levels and print pushes, time and nodes explored'
    )
    demo_parser.add_argument(
        'levels',
        nargs='*',
        help='Names of built-in levels (default: all)'
    )
    _add_search_options(demo_parser)

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Manage solver configuration'
    )
    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )
    config_subparsers.add_parser(
        'show',
        help='Show current configuration'
    )
    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 solved, 2 unsolved, 1 error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # Setup logging based on verbosity
    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return commands.EXIT_ERROR

        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'demo':
            return commands.demo_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return commands.EXIT_ERROR

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return commands.EXIT_ERROR


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
