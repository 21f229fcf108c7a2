"""Shared fixtures for the Sokoban solver tests."""

import pytest

from sokoban_solver.config import clear_config


@pytest.fixture(autouse=True)
def reset_global_config():
    """Keep configuration loaded by one test from leaking into the next."""
    clear_config()
    yield
    clear_config()
