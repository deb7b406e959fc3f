"""
Pytest configuration and shared fixtures.

This module provides fixtures and configuration used across all tests.
"""

import logging

import pytest

from hexchat.conversations import ConversationStore
from hexchat.replies import ReplySimulator
from hexchat.storage import ConversationRepository, MemorySlot

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "slow: mark test as slow (takes more than 1 second)")
    config.addinivalue_line("markers", "unit: mark test as unit test (default)")


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(autouse=True)
def configure_test_logging(caplog):
    """
    Configure logging for tests.

    Sets up log capture and undoes the level the CLI sets on the package
    logger. This fixture runs automatically for all tests.
    """
    caplog.set_level(logging.DEBUG)
    yield
    logging.getLogger("hexchat").setLevel(logging.NOTSET)
    # Drop handlers installed by LoggingSettings.configure(); their streams
    # may belong to a CliRunner that has already exited.
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


# ============================================================================
# Environment and Configuration
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """
    Point settings at a per-test storage directory with instant replies.

    Runs automatically so no test ever touches ~/.hexchat.
    """
    from hexchat.config import get_settings

    get_settings.cache_clear()
    monkeypatch.setenv("HEXCHAT_ENV_SOURCE", "environment")
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "hexchat-data"))
    monkeypatch.setenv("REPLY_DELAY_SECONDS", "0")
    yield tmp_path / "hexchat-data"
    get_settings.cache_clear()


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def slot() -> MemorySlot:
    """Empty in-memory durable slot."""
    return MemorySlot()


@pytest.fixture
def repository(slot) -> ConversationRepository:
    """Repository over the in-memory slot."""
    return ConversationRepository(slot)


@pytest.fixture
def fast_simulator() -> ReplySimulator:
    """Reply simulator with a short delay."""
    return ReplySimulator(delay_seconds=0.01)


@pytest.fixture
def store(repository) -> ConversationStore:
    """Freshly opened store without a reply simulator."""
    return ConversationStore.open(repository)
