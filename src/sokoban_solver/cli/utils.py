"""CLI utility functions."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from omegaconf import DictConfig, OmegaConf

from sokoban_solver.core.board import Board
from sokoban_solver.integration.io import render_board
from sokoban_solver.search.astar import SearchResult


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def apply_config_log_level(cfg: DictConfig, args) -> None:
    """Set the root level from ``logging.level`` unless -v or -q was given."""
    if getattr(args, 'verbose', 0) or getattr(args, 'quiet', False):
        return
    level_name = str(OmegaConf.select(cfg, 'logging.level', default='WARNING')).upper()
    logging.getLogger().setLevel(getattr(logging, level_name))


def format_duration(seconds: float) -> str:
    """Format a duration for humans."""
    if seconds < 1.0:
        return f"{seconds * 1000:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.2f}s"
    minutes, secs = divmod(seconds, 60.0)
    return f"{int(minutes)}m {secs:.1f}s"


def format_board(board: Board, symbols: str = 'xsb') -> str:
    return "\n".join(render_board(board, symbols))


def format_result(name: str, result: SearchResult) -> List[str]:
    """Summary lines for one search result."""
    lines = [f"{name}: {'solved' if result.success else 'no solution found'}"]
    if result.success:
        lines.append(f"  Pushes: {result.pushes}")
        lines.append(f"  Moves ({len(result.moves)}): {result.lurd}")
    else:
        lines.append(f"  Reason: {result.termination_reason}")
    lines.append(f"  Time: {format_duration(result.computation_time)}")
    lines.append(f"  Nodes explored: {result.nodes_explored}")
    return lines


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        json.dump(results, f, indent=2 if pretty else None)
