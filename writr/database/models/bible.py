"""
Story Bible Models
-------------------

Reference material attached to a project.

Models:
    - Character: Cast member, with links to other characters and locations
    - CharacterRelationship: Directed edge between two characters
    - Location: Place, optionally nested under a parent location
    - TimelineEvent: In-story event linked to chapters and characters
    - StyleGuideEntry: Voice, tense and formatting rules
    - WorldbuildingDoc: Free-form lore document, optionally nested
    - PlaylistTrack: Mood music for the project
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, ProjectScopedMixin, TimestampMixin


class Character(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "characters"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default="supporting")
    pronouns: Mapped[str] = mapped_column(String(50), default="")
    aliases: Mapped[List[str]] = mapped_column(JSON, default=list)
    description: Mapped[str] = mapped_column(Text, default="")
    personality: Mapped[str] = mapped_column(Text, default="")
    motivations: Mapped[str] = mapped_column(Text, default="")
    internal_conflict: Mapped[str] = mapped_column(Text, default="")
    strengths: Mapped[str] = mapped_column(Text, default="")
    weaknesses: Mapped[str] = mapped_column(Text, default="")
    character_arcs: Mapped[str] = mapped_column(Text, default="")
    dialogue_style: Mapped[str] = mapped_column(Text, default="")
    backstory: Mapped[str] = mapped_column(Text, default="")
    notes: Mapped[str] = mapped_column(Text, default="")
    linked_character_ids: Mapped[List[str]] = mapped_column(JSON, default=list)
    linked_location_ids: Mapped[List[str]] = mapped_column(JSON, default=list)
    images: Mapped[List[str]] = mapped_column(JSON, default=list)

    def __repr__(self) -> str:
        return f"<Character(id={self.id}, name={self.name!r})>"


class CharacterRelationship(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "character_relationships"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    source_character_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    target_character_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    custom_label: Mapped[str] = mapped_column(String(255), default="")


class Location(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "locations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    parent_location_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    notes: Mapped[str] = mapped_column(Text, default="")
    linked_character_ids: Mapped[List[str]] = mapped_column(JSON, default=list)
    images: Mapped[List[str]] = mapped_column(JSON, default=list)

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, name={self.name!r})>"


class TimelineEvent(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "timeline_events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    # Free-form in-story date ("Spring, Year 3"), not a calendar date
    date: Mapped[str] = mapped_column(String(255), default="")
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    linked_chapter_ids: Mapped[List[str]] = mapped_column(JSON, default=list)
    linked_character_ids: Mapped[List[str]] = mapped_column(JSON, default=list)


class StyleGuideEntry(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "style_guide_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    category: Mapped[str] = mapped_column(String(20), default="custom")
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, default="")
    order: Mapped[int] = mapped_column(Integer, nullable=False)


class WorldbuildingDoc(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "worldbuilding_docs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, default="")
    tags: Mapped[List[str]] = mapped_column(JSON, default=list)
    parent_doc_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    order: Mapped[int] = mapped_column(Integer, default=0)
    linked_character_ids: Mapped[List[str]] = mapped_column(JSON, default=list)
    linked_location_ids: Mapped[List[str]] = mapped_column(JSON, default=list)


class PlaylistTrack(ProjectScopedMixin, TimestampMixin, Base):
    __tablename__ = "playlist_tracks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), default="")
    url: Mapped[str] = mapped_column(Text, nullable=False)
    source: Mapped[str] = mapped_column(String(50), default="")
    thumbnail_url: Mapped[str] = mapped_column(Text, default="")
    duration: Mapped[int] = mapped_column(Integer, default=0)
    order: Mapped[int] = mapped_column(Integer, default=0)
