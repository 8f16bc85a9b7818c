"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Logging state reset between tests
- Mock settings/configuration
- Sample message texts
"""

import logging
import os

import pytest
import structlog

from tweet_entities.config import Settings
from tweet_entities.logging_config import LIBRARY_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_logging():
    """
    Restore structlog defaults and the library logger after each test.

    Tests run against the unconfigured state a host application sees on import.
    """
    yield
    structlog.reset_defaults()
    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    library_logger.handlers = [logging.NullHandler()]
    library_logger.setLevel(logging.NOTSET)
    library_logger.propagate = True


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create settings with the documented defaults and console logging.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        log_level="INFO",
        log_json=False,
        username_url_base="http://twitter.com/",
        hashtag_url_base="http://twitter.com/search?q=",
        list_url_base=None,
    )


@pytest.fixture
def sample_message() -> str:
    """Message with one entity of each linkable kind."""
    return "#fun with @joe at http://example.com"


@pytest.fixture
def sample_messages() -> list:
    """Messages covering the common entity shapes."""
    return [
        "@joe hello there",
        "cc @joe and @jane",
        "mail me at user@example.com",
        "#python #rust and #café",
        "visit http://example.com now, or example.org",
        "😀 @bob #emoji https://example.com/path?q=1",
        "<b>@joe</b> already <a href=\"http://x.com\">@linked</a>",
        "",
    ]


def pytest_configure(config):
    """
    Configure pytest with custom markers and settings.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
