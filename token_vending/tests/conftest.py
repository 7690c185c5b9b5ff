"""
Pytest configuration for token vending tests.

Adds the repository root to sys.path so the package imports without
being installed, provides fresh registries for each test, and releases
every singleton before pytest closes its captured streams.
"""

import sys
from pathlib import Path

import pytest


# Add the repository root to sys.path for proper imports
repo_root = Path(__file__).parent.parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


from token_vending.core.singleton import SingletonAccessor  # noqa: E402
from token_vending.domain.session_registry import (  # noqa: E402
    SessionRegistry,
    shutdown_session_registry,
)
from token_vending.infrastructure.settings import shutdown_settings  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def release_singletons():
    """Shut down the built-in singletons at the end of the run."""
    yield
    shutdown_session_registry()
    shutdown_settings()


@pytest.fixture
def make_accessor():
    """Build accessors that are shut down when the test finishes."""
    accessors = []

    def factory(*args, **kwargs):
        accessor = SingletonAccessor(*args, **kwargs)
        accessors.append(accessor)
        return accessor

    yield factory

    for accessor in accessors:
        accessor.shutdown()


@pytest.fixture
def registry():
    """Create a fresh, non-shared session registry."""
    return SessionRegistry()


@pytest.fixture
def shared_registry():
    """Give the test a fresh process-wide registry and drop it afterwards."""
    shutdown_session_registry()
    yield
    shutdown_session_registry()
