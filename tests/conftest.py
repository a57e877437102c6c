"""Shared test fixtures for decodable tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from decodable import json_utils as json_utils_mod
from decodable.config import _test_hooks
from decodable.logging import stdlib_logging


@pytest.fixture(autouse=True)
def _restore_config_hooks() -> Generator[None, None, None]:
    """Restore config hooks after each test."""
    original_get_env = _test_hooks.get_env
    yield
    _test_hooks.get_env = original_get_env


@pytest.fixture(autouse=True)
def _restore_json_utils_hooks() -> Generator[None, None, None]:
    """Restore json_utils hooks after each test."""
    original_json_loads = json_utils_mod._json_loads
    yield
    json_utils_mod._json_loads = original_json_loads


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Generator[None, None, None]:
    """Restore root logger handlers and level after each test."""
    root = stdlib_logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def fake_env() -> dict[str, str]:
    """Route config env lookups to a dict the test can fill."""
    values: dict[str, str] = {}
    _test_hooks.get_env = values.get
    return values
