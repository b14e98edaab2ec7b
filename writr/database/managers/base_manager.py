#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing the session, logger and lock-retry plumbing shared
by every collection manager.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import time
from abc import ABC
from typing import Any, Callable, Optional

# --- Third party imports ---
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

# --- Local imports ---
from writr.core.exceptions import StorageError
from writr.core.logging_manager import WritrLogger, safe_logger


class BaseManager(ABC):
    """
    Abstract base for managers bound to one SQLAlchemy session.

    Managers never commit: the owning ``WritrDB.session_scope()`` decides
    whether everything done through them is committed or rolled back.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[WritrLogger] = None):
        self.session = session
        self.logger = logger

    def _execute_with_retry(
        self,
        operation: Callable,
        max_retries: int = 3,
        retry_delay: float = 0.1,
    ) -> Any:
        """
        Execute a database operation, retrying while SQLite reports a lock.

        Args:
            operation: Callable that performs the operation
            max_retries: Maximum number of attempts
            retry_delay: Base delay between retries (exponential backoff)

        Returns:
            Result of the operation

        Raises:
            OperationalError: If the error is not a lock or retries ran out
        """
        for attempt in range(max_retries):
            try:
                return operation()
            except OperationalError as e:
                error_msg = str(e).lower()

                if (
                    "locked" in error_msg or "busy" in error_msg
                ) and attempt < max_retries - 1:
                    wait_time = retry_delay * (2**attempt)
                    safe_logger(self.logger).log_debug(
                        f"Database locked, retrying in {wait_time}s",
                        {"attempt": attempt + 1, "max_retries": max_retries},
                    )
                    time.sleep(wait_time)
                    continue

                raise

        raise StorageError("Retry loop completed without success")
