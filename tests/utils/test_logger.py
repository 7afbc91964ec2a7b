"""Tests for logger utility."""

import logging
from logging.handlers import RotatingFileHandler

from revline.utils.logger import setup_logger, get_logger, get_app_logger, init_app_logger


class TestSetupLogger:
    """SUT: setup_logger"""

    def test_returns_logger(self):
        """Should return a Logger instance."""
        logger = setup_logger("test_logger_returns")
        assert isinstance(logger, logging.Logger)

    def test_with_level(self):
        """Setting DEBUG level should take effect."""
        logger = setup_logger("test_logger_level", log_level="DEBUG")
        assert logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        logger = setup_logger("test_logger_unknown", log_level="LOUD")
        assert logger.level == logging.INFO

    def test_no_duplicate_handlers(self):
        """Calling multiple times should not add duplicate handlers."""
        name = "test_logger_dup"
        logger1 = setup_logger(name)
        handler_count = len(logger1.handlers)
        logger2 = setup_logger(name, log_level="WARNING")
        assert len(logger2.handlers) == handler_count
        assert logger1 is logger2
        assert logger2.level == logging.WARNING

    def test_rotating_file_handler(self, tmp_path):
        """A log file path adds a rotating file handler and creates its directory."""
        log_file = tmp_path / "nested" / "service.log"
        logger = setup_logger("test_logger_file", log_file=str(log_file))

        handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(handlers) == 1
        assert log_file.parent.is_dir()

        logger.info("hello")
        handlers[0].flush()
        assert "hello" in log_file.read_text(encoding="utf-8")

        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


class TestGetLogger:
    """SUT: get_logger"""

    def test_child_of_package_logger(self):
        assert get_logger("api").name == "revline.api"

    def test_already_qualified(self):
        assert get_logger("revline.core").name == "revline.core"
        assert get_logger("revline").name == "revline"


class TestAppLogger:
    """SUT: init_app_logger / get_app_logger"""

    def test_default(self):
        """Should return a logger even when not explicitly initialized."""
        logger = get_app_logger()
        assert isinstance(logger, logging.Logger)
        assert logger.name == "revline"

    def test_init_from_settings(self):
        class FakeSettings:
            log_level = "DEBUG"
            log_file = None

        logger = init_app_logger(FakeSettings())
        assert logger.name == "revline"
        assert logger.level == logging.DEBUG
        assert get_app_logger() is logger

        # module loggers propagate into it
        assert logging.getLogger("revline.core.reverse_reader").getEffectiveLevel() == logging.DEBUG
