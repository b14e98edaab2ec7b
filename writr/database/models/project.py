"""
Project Models
---------------

The project root and its manuscript tables.

Models:
    - Project: Root entity of every project graph
    - Chapter: Ordered manuscript chapter
    - ChapterSnapshot: Named point-in-time copy of a chapter's content
    - ProjectDictionary: Per-project spellcheck word list (0..1 per project)
"""
from __future__ import annotations

from typing import List

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, ProjectScopedMixin, TimestampMixin


class Project(TimestampMixin, Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    genre: Mapped[str] = mapped_column(String(255), default="")
    target_word_count: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, title={self.title!r})>"


class Chapter(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "chapters"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, default="")
    synopsis: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(20), default="draft")
    word_count: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<Chapter(id={self.id}, title={self.title!r}, order={self.order})>"


class ChapterSnapshot(ProjectScopedMixin, Base):
    """Snapshots are immutable, so they carry a creation timestamp only."""

    __tablename__ = "chapter_snapshots"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    chapter_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), default="")
    content: Mapped[str] = mapped_column(Text, default="")
    word_count: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)


class ProjectDictionary(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "project_dictionaries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    words: Mapped[List[str]] = mapped_column(JSON, default=list)
