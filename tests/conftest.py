"""Pytest hooks and fixtures."""

import os

import pytest
from loguru import logger


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "e2e: opens real sockets on the loopback interface",
    )


def pytest_collection_modifyitems(config, items):
    """Skip e2e tests when DECKBRIDGE_NO_NETWORK=1 (sandboxes without loopback)."""
    if os.environ.get("DECKBRIDGE_NO_NETWORK") != "1":
        return
    skip = pytest.mark.skip(reason="Loopback networking disabled (DECKBRIDGE_NO_NETWORK=1)")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def log_lines():
    """Collect loguru output as ``"LEVEL message"`` lines."""
    lines: list[str] = []
    handler_id = logger.add(lambda message: lines.append(message.rstrip("\n")), level="DEBUG", format="{level} {message}")
    yield lines
    logger.remove(handler_id)
