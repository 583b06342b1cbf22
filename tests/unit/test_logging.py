"""Tests for logging setup."""

import pytest
import structlog

from taskcal.logging import setup_logging


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestSetupLogging:
    def test_production_renders_json(self, config, reset_structlog):
        setup_logging(config)
        assert structlog.is_configured()
        assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)

    def test_debug_renders_console(self, config, reset_structlog):
        config.debug = True
        setup_logging(config)
        assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)
