"""
Tests for logging setup.
"""

import logging
import warnings

import pytest
import structlog

from src.core.logger import level_from_env, setup_logging


class TestLevelFromEnv:
    """Tests for LOG_LEVEL resolution."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("CRITICAL", logging.CRITICAL),
        ],
    )
    def test_known_levels(self, monkeypatch, value, expected):
        monkeypatch.setenv("LOG_LEVEL", value)

        assert level_from_env() == expected

    def test_unset_uses_default(self):
        assert level_from_env() == logging.INFO
        assert level_from_env(default=logging.ERROR) == logging.ERROR

    def test_unknown_uses_default(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "VERBOSE")

        assert level_from_env() == logging.INFO


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_sets_root_level(self):
        setup_logging(level=logging.WARNING)
        assert logging.getLogger().level == logging.WARNING

        setup_logging(level=logging.INFO)
        assert logging.getLogger().level == logging.INFO

    def test_structlog_uses_stdlib(self):
        setup_logging(level=logging.INFO)

        assert structlog.get_config()["logger_factory"].__class__ is structlog.stdlib.LoggerFactory

    def test_no_deprecation_warnings(self):
        """The renderer is configured with current structlog arguments."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            setup_logging(level=logging.INFO)
