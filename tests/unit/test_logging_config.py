"""
Unit tests for logging configuration module.
"""

import logging
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

from secboot.core.logging_config import setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_default_level_is_warning(self):
        """Test the quiet default."""
        logger = setup_logging()

        assert logger.name == "secboot"
        assert logger.level == logging.WARNING

    def test_verbose_is_debug(self):
        """Test verbose switches to DEBUG."""
        assert setup_logging(verbose=True).level == logging.DEBUG

    def test_level_name(self):
        """Test an explicit level name."""
        assert setup_logging(level="info").level == logging.INFO

    def test_invalid_level_defaults_to_warning(self):
        """Test unknown level names fall back to WARNING."""
        assert setup_logging(level="INVALID").level == logging.WARNING

    def test_rich_handler_without_propagation(self):
        """Test secboot logs go to a RichHandler only."""
        logger = setup_logging()

        assert [type(h) for h in logger.handlers] == [RichHandler]
        assert logger.propagate is False

    def test_reconfiguration_replaces_handlers(self):
        """Test repeated setup does not stack handlers."""
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        """Test a rotating file log is added and receives DEBUG records."""
        log_file = tmp_path / "logs" / "secboot.log"

        logger = setup_logging(level="WARNING", log_file=log_file)
        logging.getLogger("secboot.test").debug("dispatch probe")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.parent.exists()
        assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
        assert "dispatch probe" in log_file.read_text(encoding="utf-8")

    def test_console_keeps_level_with_file(self, tmp_path):
        """Test the console handler still filters at the configured level."""
        logger = setup_logging(level="ERROR", log_file=tmp_path / "secboot.log")

        rich_handler = next(h for h in logger.handlers if isinstance(h, RichHandler))
        assert rich_handler.level == logging.ERROR
        assert logger.level == logging.DEBUG
