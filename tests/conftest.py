"""
Global pytest configuration and fixtures for component check tests.
"""

import logging
import os
from pathlib import Path

import pytest

from component_check import ComponentLoader, ComponentValidator, ServiceContext

FIXTURES_DIR = Path(__file__).parent / "fixtures"
COMPONENTS_DIR = FIXTURES_DIR / "components"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep process settings from leaking into tests."""
    for key in list(os.environ):
        if key.upper().startswith("COMPONENT") or key in {
            "LOG_LEVEL",
            "LOG_FORMAT",
            "ENABLE_TRACE_LOGGING",
        }:
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def components_dir() -> Path:
    """Directory holding the fixture component modules."""
    return COMPONENTS_DIR


@pytest.fixture
def service() -> ServiceContext:
    return ServiceContext()


@pytest.fixture
def loader(components_dir, service) -> ComponentLoader:
    """Loader searching the fixture components with a short hook timeout."""
    return ComponentLoader(
        search_paths=[components_dir],
        props={"audience": "world"},
        hook_timeout=5.0,
        service=service,
    )


@pytest.fixture
def validator() -> ComponentValidator:
    return ComponentValidator(hook_timeout=5.0)


@pytest.fixture
def restore_root_logger():
    """Undo handlers and level changes made by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
