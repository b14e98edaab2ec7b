#!/usr/bin/env python3
"""
timestamps.py
-------------
UTC timestamp helpers producing the ISO text stored on every record.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """
    Render a datetime as millisecond-precision UTC ISO text with a 'Z' suffix.

    Naive datetimes are taken to be UTC.

    Examples:
        >>> to_iso(datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))
        '2024-03-01T12:00:00.000Z'
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def now_iso(moment: Optional[datetime] = None) -> str:
    """Current (or given) moment as ISO text."""
    return to_iso(moment or now_utc())


def iso_date(moment: datetime) -> str:
    """UTC calendar date of a moment as YYYY-MM-DD."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).date().isoformat()
