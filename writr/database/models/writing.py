"""
Writing Activity Models
------------------------

Models:
    - WritingSprint: Timed writing burst; may be global (no project)
    - WritingSession: Hourly word-count bucket for a chapter
    - Comment: Margin comment anchored to a text range in a chapter
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, ProjectScopedMixin, TimestampMixin


class WritingSprint(TimestampMixin, Base):
    __tablename__ = "writing_sprints"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    project_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    chapter_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    duration_ms: Mapped[int] = mapped_column(Integer, nullable=False)
    word_count_goal: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="active")
    started_at: Mapped[str] = mapped_column(String(40), nullable=False)
    paused_at: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    ended_at: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    total_paused_ms: Mapped[int] = mapped_column(Integer, default=0)
    start_word_count: Mapped[int] = mapped_column(Integer, default=0)
    end_word_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)


class WritingSession(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "writing_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    chapter_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    hour_of_day: Mapped[int] = mapped_column(Integer, nullable=False)
    word_count_start: Mapped[int] = mapped_column(Integer, default=0)
    word_count_end: Mapped[int] = mapped_column(Integer, default=0)
    duration_ms: Mapped[int] = mapped_column(Integer, default=0)


class Comment(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    chapter_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, default="")
    color: Mapped[str] = mapped_column(String(20), default="yellow")
    from_offset: Mapped[int] = mapped_column(Integer, nullable=False)
    to_offset: Mapped[int] = mapped_column(Integer, nullable=False)
    anchor_text: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(20), default="active")
    resolved_at: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
