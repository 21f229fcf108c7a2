"""Configuration validation for the Sokoban solver."""

import logging
from typing import Any, List

from omegaconf import DictConfig

logger = logging.getLogger(__name__)

ASSIGNMENT_METHODS = ('exhaustive', 'hungarian')
TIE_BREAKS = ('low_g', 'high_g')
SYMBOL_SETS = ('xsb', 'unicode')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    errors = collect_config_errors(config)
    if errors:
        raise ConfigValidationError(f"Configuration validation failed: {'; '.join(errors)}")
    logger.info("Configuration validation passed")


def collect_config_errors(config: DictConfig) -> List[str]:
    """Return every validation problem found in ``config``."""
    errors: List[str] = []
    errors.extend(validate_search_config(config.get('search', {})))
    errors.extend(validate_heuristics_config(config.get('heuristics', {})))
    errors.extend(validate_io_config(config.get('io', {})))
    errors.extend(validate_logging_config(config.get('logging', {})))
    return errors


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_search_config(search_config: DictConfig) -> List[str]:
    """Validate search configuration section."""
    errors: List[str] = []
    if not search_config:
        return errors

    max_nodes = search_config.get('max_nodes_expanded', 500000)
    if not _is_positive_int(max_nodes):
        errors.append(f"search.max_nodes_expanded must be positive integer, got {max_nodes}")

    tie_break = search_config.get('tie_break', 'low_g')
    if tie_break not in TIE_BREAKS:
        errors.append(f"search.tie_break must be one of {list(TIE_BREAKS)}, got {tie_break}")

    interval = search_config.get('progress_interval', 10000)
    if not isinstance(interval, int) or isinstance(interval, bool) or interval < 0:
        errors.append(f"search.progress_interval must be non-negative integer, got {interval}")

    return errors


def validate_heuristics_config(heuristics_config: DictConfig) -> List[str]:
    """Validate heuristics configuration section."""
    errors: List[str] = []
    if not heuristics_config:
        return errors

    assignment = heuristics_config.get('assignment', 'exhaustive')
    if assignment not in ASSIGNMENT_METHODS:
        errors.append(
            f"heuristics.assignment must be one of {list(ASSIGNMENT_METHODS)}, got {assignment}"
        )

    max_boxes = heuristics_config.get('max_exhaustive_boxes', 8)
    if not _is_positive_int(max_boxes):
        errors.append(f"heuristics.max_exhaustive_boxes must be positive integer, got {max_boxes}")

    return errors


def validate_io_config(io_config: DictConfig) -> List[str]:
    """Validate io configuration section."""
    if not io_config:
        return []

    symbols = io_config.get('symbols', 'xsb')
    if symbols not in SYMBOL_SETS:
        return [f"io.symbols must be one of {list(SYMBOL_SETS)}, got {symbols}"]
    return []


def validate_logging_config(logging_config: DictConfig) -> List[str]:
    """Validate logging configuration section."""
    if not logging_config:
        return []

    level = str(logging_config.get('level', 'INFO')).upper()
    if level not in LOG_LEVELS:
        return [f"logging.level must be one of {list(LOG_LEVELS)}, got {level}"]
    return []
