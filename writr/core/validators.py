#!/usr/bin/env python3
"""
validators.py
-------------------
Primitive value checks shared by the record schemas.

DataValidator holds stateless helpers that either return a normalized
value or raise ValueError, which pydantic reports as a field error.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from datetime import date, datetime
from typing import Any

_UUID = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
_ISO_DATETIME = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:\d{2})$"
)


class DataValidator:
    """Collection of validation helpers for identifiers, timestamps and dates."""

    @staticmethod
    def validate_uuid(value: Any) -> str:
        """
        Ensure a value is a canonical UUID string.

        Args:
            value: Candidate identifier

        Returns:
            The identifier unchanged

        Raises:
            ValueError: If value is not a string in UUID form
        """
        if not isinstance(value, str) or not _UUID.match(value):
            raise ValueError(f"Invalid UUID: {value!r}")
        return value

    @staticmethod
    def validate_iso_datetime(value: Any) -> str:
        """
        Ensure a value is an ISO-8601 datetime string with an explicit offset.

        The original text is returned so stored timestamps round-trip
        byte for byte.

        Raises:
            ValueError: If value is not an ISO datetime string
        """
        if not isinstance(value, str) or not _ISO_DATETIME.match(value):
            raise ValueError(f"Invalid ISO datetime: {value!r}")
        try:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid ISO datetime: {value!r}") from e
        return value

    @staticmethod
    def validate_iso_date(value: Any) -> str:
        """Ensure a value is a YYYY-MM-DD calendar date string."""
        if not isinstance(value, str) or len(value) != 10:
            raise ValueError(f"Invalid date: {value!r}")
        try:
            date.fromisoformat(value)
        except ValueError as e:
            raise ValueError(f"Invalid date: {value!r}") from e
        return value
