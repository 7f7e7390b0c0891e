"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

import cogmetrics.archive
import cogmetrics.server.app
from cogmetrics.logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_default_level(self):
        logger = setup_logging()
        assert logger.name == "cogmetrics"
        assert logger.level == logging.WARNING
        assert any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)

    @pytest.mark.parametrize(
        "verbosity, level",
        [("quiet", logging.ERROR), ("normal", logging.WARNING), ("verbose", logging.DEBUG)],
    )
    def test_verbosity_levels(self, verbosity, level):
        assert setup_logging(verbosity).level == level

    def test_unknown_verbosity_falls_back_to_warning(self):
        assert setup_logging("chatty").level == logging.WARNING

    def test_chatty_libraries_quieted(self):
        setup_logging("normal")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("python_multipart").level == logging.WARNING

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging("verbose", log_file=str(log_file))
        get_logger("archive").debug("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        text = log_file.read_text()
        assert "hello file" in text
        assert "cogmetrics.archive" in text


class TestGetLogger:
    def test_prefixes_name(self):
        assert get_logger("server.app").name == "cogmetrics.server.app"

    def test_keeps_package_name(self):
        assert get_logger("cogmetrics.metrics").name == "cogmetrics.metrics"

    def test_root(self):
        assert get_logger().name == "cogmetrics"

    def test_module_loggers_share_namespace(self):
        assert cogmetrics.archive.logger.name == "cogmetrics.archive"
        assert cogmetrics.server.app.logger.name == "cogmetrics.server.app"
