"""
Pytest configuration and shared fixtures for undoable tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Unit tests go in tests/unit/<layer>/
"""

from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from undoable import __version__

    return __version__


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore structlog defaults so configuration never leaks between tests."""
    yield
    structlog.reset_defaults()
