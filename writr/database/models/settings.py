"""
Singleton Models
-----------------

Process-wide rows keyed by a fixed identifier rather than a UUID.

Models:
    - AppSettings: Preferences document, stored as one JSON payload
    - AppDictionary: Global spellcheck word list
"""
from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class AppSettings(Base):
    """
    Settings are stored as a single JSON document so preference keys can
    be added without a schema change.
    """

    __tablename__ = "app_settings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    payload: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)


class AppDictionary(Base):
    __tablename__ = "app_dictionary"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    words: Mapped[List[str]] = mapped_column(JSON, default=list)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)
