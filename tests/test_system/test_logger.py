import json
import logging
from decimal import Decimal

import pytest

from utils.exceptions import ConfigurationException
from utils.system.logger import (
    JsonFormatter,
    LoggerConfig,
    clear_logs,
    log_method,
    logger,
    rotate_logs,
    setup_logger,
    setup_structured_logger,
)


class TestLogger:
    @pytest.fixture
    def logger_test_dir(self, tmp_path):
        """Create a temporary directory for log files."""
        return tmp_path

    @pytest.fixture
    def logger_config(self, logger_test_dir):
        """Create a logger configuration."""
        return LoggerConfig(
            log_file=logger_test_dir / "app.log",
            level=logging.INFO,
            max_size=1024 * 1024,  # 1MB
            backup_count=3,
            format="json",
        )

    @pytest.fixture
    def configured_logger(self, logger_config):
        """Attach a file handler to the global logger and restore it afterwards."""
        saved_handlers = logger._logger.handlers[:]
        saved_level = logger._logger.level
        for handler in saved_handlers:
            logger._logger.removeHandler(handler)

        setup_logger(logger_config)
        yield logger

        for handler in logger._logger.handlers[:]:
            handler.close()
            logger._logger.removeHandler(handler)
        for handler in saved_handlers:
            logger._logger.addHandler(handler)
        logger._logger.setLevel(saved_level)

    def _read_logs(self, configured_logger, log_file):
        for handler in configured_logger._logger.handlers:
            handler.flush()
        with open(log_file) as f:
            return [json.loads(line) for line in f.readlines()]

    def test_logger_initialization(self, configured_logger):
        """Test basic logger initialization."""
        assert configured_logger is not None
        assert isinstance(configured_logger._logger, logging.Logger)
        assert configured_logger._logger.level == logging.INFO

    def test_json_formatter(self):
        """Test JSON formatter."""
        formatter = JsonFormatter()
        record = logging.LogRecord(
            name="test",
            level=logging.INFO,
            pathname="test.py",
            lineno=1,
            msg="Test message",
            args=(),
            exc_info=None,
        )

        parsed = json.loads(formatter.format(record))

        assert "timestamp" in parsed
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Test message"

    def test_log_levels(self, configured_logger, logger_test_dir):
        """Debug messages are dropped at INFO level."""
        configured_logger.debug("Debug message")
        configured_logger.info("Info message")
        configured_logger.warning("Warning message")
        configured_logger.error("Error message")
        configured_logger.critical("Critical message")

        logs = self._read_logs(configured_logger, logger_test_dir / "app.log")

        assert [log["level"] for log in logs] == ["INFO", "WARNING", "ERROR", "CRITICAL"]

    def test_decimal_extra_fields(self, configured_logger, logger_test_dir):
        """Decimal amounts are written as exact strings."""
        configured_logger.info("Sale totals computed", extra={"total_price": Decimal("25.00")})

        log = self._read_logs(configured_logger, logger_test_dir / "app.log")[0]

        assert log["message"] == "Sale totals computed"
        assert log["total_price"] == "25.00"

    def test_with_context(self, configured_logger, logger_test_dir):
        configured_logger.with_context(sale="A").info("Context message")

        log = self._read_logs(configured_logger, logger_test_dir / "app.log")[0]

        assert log["sale"] == "A"

    def test_log_exceptions(self, configured_logger, logger_test_dir):
        """Test exception logging."""
        try:
            raise ValueError("Test error")
        except ValueError:
            configured_logger.exception("An error occurred")

        log = self._read_logs(configured_logger, logger_test_dir / "app.log")[0]

        assert "exc_info" in log
        assert "ValueError: Test error" in log["exc_info"]

    def test_log_method_reports_exceptions(self, configured_logger, logger_test_dir):
        @log_method()
        def explode():
            raise ValueError("boom")

        with pytest.raises(ValueError):
            explode()

        log = self._read_logs(configured_logger, logger_test_dir / "app.log")[0]

        assert log["message"] == "Exception in explode"
        assert log["exception_type"] == "ValueError"

    def test_clear_logs(self, configured_logger, logger_test_dir):
        """Test log clearing functionality."""
        configured_logger.info("Test message")

        for handler in configured_logger._logger.handlers[:]:
            handler.close()
            configured_logger._logger.removeHandler(handler)

        clear_logs(logger_test_dir)

        assert not (logger_test_dir / "app.log").exists()

    def test_manual_log_rotation(self, configured_logger, logger_test_dir):
        """Test manual log rotation."""
        configured_logger.info("Test message before rotation")

        rotate_logs(logger_test_dir)

        configured_logger.info("Test message after rotation")

        for handler in configured_logger._logger.handlers:
            handler.flush()

        assert (logger_test_dir / "app.log").exists()
        assert (logger_test_dir / "app.log.1").exists()

    def test_rotation_only_touches_given_directory(self, configured_logger, logger_test_dir, tmp_path_factory):
        configured_logger.info("Test message")

        rotate_logs(tmp_path_factory.mktemp("elsewhere"))

        for handler in configured_logger._logger.handlers:
            handler.flush()

        assert not (logger_test_dir / "app.log.1").exists()

    def test_log_format_validation(self, logger_test_dir):
        """Test log format validation."""
        invalid_config = LoggerConfig(
            log_file=logger_test_dir / "app.log",
            level=logging.INFO,
            max_size=1024,
            backup_count=3,
            format="invalid_format",
        )

        with pytest.raises(ConfigurationException):
            setup_logger(invalid_config)

    def test_invalid_yaml_config(self, tmp_path):
        config_path = tmp_path / "logging_config.yaml"
        config_path.write_text("version: [unclosed")

        with pytest.raises(ConfigurationException):
            setup_structured_logger(config_path)

    def test_yaml_config_is_applied(self, tmp_path):
        config_path = tmp_path / "logging_config.yaml"
        config_path.write_text(
            "version: 1\n"
            "disable_existing_loggers: false\n"
            "loggers:\n"
            "  yaml_configured:\n"
            "    level: WARNING\n"
        )

        setup_structured_logger(config_path)

        assert logging.getLogger("yaml_configured").level == logging.WARNING
