"""Pytest configuration and shared fixtures."""

import logging
from collections.abc import Iterator

import pytest

# The ringclock testing plugin is registered via a ``pytest11`` entry
# point for external consumers.  Our own suite disables it
# (``-p no:ringclock``) and loads it here instead, so the ringclock
# import chain is measured by coverage.
pytest_plugins = ["ringclock.testing._plugin"]


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (event loop, file output)"
    )


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Save and restore root logger handlers and level.

    ``FaceApp`` and the CLI commands call ``configure_logging()``, which
    replaces the root handlers; this keeps that from leaking across tests.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for h in root.handlers:
        if h not in original_handlers:
            h.close()
    root.handlers = original_handlers
    root.setLevel(original_level)
