"""
Outline Grid Models
--------------------

Spreadsheet-style plotting board: columns are plot threads, rows are beats
(optionally tied to a chapter), cells hold the text at each intersection.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, ProjectScopedMixin, TimestampMixin


class OutlineGridColumn(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "outline_grid_columns"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), default="")
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    width: Mapped[int] = mapped_column(Integer, default=200)


class OutlineGridRow(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "outline_grid_rows"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    linked_chapter_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    label: Mapped[str] = mapped_column(String(255), default="")
    order: Mapped[int] = mapped_column(Integer, nullable=False)


class OutlineGridCell(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "outline_grid_cells"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    row_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    column_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, default="")
    color: Mapped[str] = mapped_column(String(20), default="white")
