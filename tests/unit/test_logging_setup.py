"""Tests for logging setup."""

import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from sanity import check
from sanity.config import LoggingConfig, SanityConfig
from sanity.logging_setup import configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("sanity")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


class TestConfigureLogging:
    """Test rich handler installation."""

    def test_installs_single_handler(self, package_logger):
        configure_logging("debug")
        configure_logging("info")
        rich_handlers = [h for h in package_logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert package_logger.level == logging.INFO

    def test_warn_level(self, package_logger):
        configure_logging()
        assert package_logger.level == logging.WARNING

    def test_level_from_config(self, package_logger):
        configure_logging(SanityConfig(logging={"level": "debug"}))
        assert package_logger.level == logging.DEBUG

        configure_logging(LoggingConfig(level="error"))
        assert package_logger.level == logging.ERROR

    def test_unknown_level(self, package_logger):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("trace")

    def test_traversal_warnings_reach_console(self, package_logger):
        console = Console(record=True, width=200, color_system=None)
        configure_logging("warn", console=console)

        check({"a": "", "b": ""}, schema={"a": {}, "b": {"rules": ["notnull"]}})
        assert "a declares no rules" in console.export_text()
