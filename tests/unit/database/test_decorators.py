"""Tests for database decorators."""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from writr.core.exceptions import StorageError
from writr.core.logging_manager import WritrLogger
from writr.database.decorators import handle_db_errors, log_database_operation


class Operations:
    """Minimal object carrying a logger, as managers and exporters do."""

    def __init__(self, logger):
        self.logger = logger

    @log_database_operation("test_operation")
    def succeed(self, value, flag=False):
        return value * 2

    @log_database_operation("test_operation")
    def fail(self):
        raise ValueError("invalid value")


class TestLogDatabaseOperation:
    """Tests for log_database_operation decorator."""

    def test_successful_operation(self):
        """Completion is logged with success and duration."""
        mock_logger = MagicMock(spec=WritrLogger)

        assert Operations(mock_logger).succeed(21) == 42

        mock_logger.log_operation.assert_called_once()
        call_args = mock_logger.log_operation.call_args
        assert call_args[0][0] == "test_operation_completed"
        assert call_args[0][1]["success"] is True
        assert isinstance(call_args[0][1]["duration_seconds"], float)

    def test_start_logged_at_debug(self):
        mock_logger = MagicMock(spec=WritrLogger)

        Operations(mock_logger).succeed(1, flag=True)

        message, details = mock_logger.log_debug.call_args[0]
        assert message == "Starting test_operation"
        assert details["kwargs_keys"] == ["flag"]

    def test_none_logger(self):
        """Works without a logger (uses NullLogger)."""
        assert Operations(None).succeed(2) == 4

    def test_exceptions_logged_and_propagated(self):
        mock_logger = MagicMock(spec=WritrLogger)

        with pytest.raises(ValueError):
            Operations(mock_logger).fail()

        mock_logger.log_error.assert_called_once()
        assert mock_logger.log_error.call_args[0][1]["operation"] == "test_operation"
        mock_logger.log_operation.assert_not_called()


class TestHandleDbErrors:
    """Tests for handle_db_errors decorator."""

    def test_integrity_error_raises_storage_error(self):
        @handle_db_errors
        def insert():
            raise IntegrityError("statement", {}, Exception("duplicate"))

        with pytest.raises(StorageError) as exc_info:
            insert()
        assert "Data integrity violation: duplicate" in str(exc_info.value)

    def test_sqlalchemy_error_raises_storage_error(self):
        @handle_db_errors
        def query():
            raise SQLAlchemyError("connection failed")

        with pytest.raises(StorageError, match="Database operation failed"):
            query()

    def test_other_exceptions_propagate(self):
        @handle_db_errors
        def broken():
            raise ValueError("invalid value")

        with pytest.raises(ValueError):
            broken()

    def test_return_value_passed_through(self):
        @handle_db_errors
        def ok():
            return "done"

        assert ok() == "done"
