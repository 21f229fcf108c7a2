"""Hydra-backed configuration for the Sokoban solver.

Defaults live in ``conf/config.yaml`` at the project root. String overrides
(``search.tie_break=high_g``) are applied by Hydra at compose time; typed values
coming from CLI flags are merged afterwards with
:meth:`ConfigManager.update_config`. The last loaded configuration is also kept
as the process-wide configuration that ``AStarSearcher`` falls back to.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra
from omegaconf import DictConfig, OmegaConf, open_dict

from .validators import validate_config

logger = logging.getLogger(__name__)

# src/sokoban_solver/config/config_manager.py -> project root
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[3] / "conf"

_global_config: Optional[DictConfig] = None


class ConfigManager:
    """Loads, updates and renders the solver configuration."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            config_dir: Directory holding ``config.yaml``. Defaults to the
                project's ``conf/`` directory.

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        self.config_dir = Path(config_dir or DEFAULT_CONFIG_DIR).resolve()
        if not self.config_dir.is_dir():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")
        self.config: Optional[DictConfig] = None

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Compose ``config_name`` with Hydra and make it the global config.

        Raises:
            ConfigValidationError: If ``validate`` is set and a value is invalid
        """
        global _global_config

        GlobalHydra.instance().clear()
        try:
            with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
                cfg = compose(config_name=config_name, overrides=list(overrides or []))
            if validate:
                validate_config(cfg)
        except Exception as e:
            logger.error(f"Failed to load configuration {config_name!r}: {e}")
            raise

        self.config = cfg
        _global_config = cfg
        logger.debug(f"Loaded {config_name} from {self.config_dir} with overrides {overrides or []}")
        return cfg

    def update_config(self, updates: Dict[str, Any]) -> DictConfig:
        """Set dot-notation keys on the loaded config and validate the result.

        Raises:
            RuntimeError: If no configuration has been loaded
            ConfigValidationError: If an updated value is invalid
        """
        cfg = self._loaded()
        with open_dict(cfg):
            for key, value in updates.items():
                OmegaConf.update(cfg, key, value, merge=True)
        validate_config(cfg)
        logger.debug(f"Configuration updated with {updates}")
        return cfg

    def to_yaml(self, resolve: bool = True) -> str:
        return OmegaConf.to_yaml(self._loaded(), resolve=resolve)

    def _loaded(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        return self.config


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load a configuration through a fresh :class:`ConfigManager`."""
    return ConfigManager(config_dir).load_config(config_name, overrides, validate)


def get_config() -> Optional[DictConfig]:
    """The most recently loaded configuration, or None."""
    return _global_config


def clear_config() -> None:
    """Forget the global configuration so defaults apply again."""
    global _global_config
    _global_config = None


def get_parameter(key: str, default: Any = None) -> Any:
    """Look up a dot-notation key in the global configuration.

    Returns ``default`` when nothing is loaded or the key is absent.
    """
    if _global_config is None:
        return default
    return OmegaConf.select(_global_config, key, default=default)
