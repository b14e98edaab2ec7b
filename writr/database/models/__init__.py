"""
ORM models for the writr store, one table per record collection.
"""
from .base import Base, ProjectScopedMixin, TimestampMixin
from .bible import (
    Character,
    CharacterRelationship,
    Location,
    PlaylistTrack,
    StyleGuideEntry,
    TimelineEvent,
    WorldbuildingDoc,
)
from .outline import OutlineGridCell, OutlineGridColumn, OutlineGridRow
from .project import Chapter, ChapterSnapshot, Project, ProjectDictionary
from .settings import AppDictionary, AppSettings
from .writing import Comment, WritingSession, WritingSprint

__all__ = [
    "Base",
    "ProjectScopedMixin",
    "TimestampMixin",
    "Project",
    "Chapter",
    "ChapterSnapshot",
    "ProjectDictionary",
    "Character",
    "CharacterRelationship",
    "Location",
    "TimelineEvent",
    "StyleGuideEntry",
    "WorldbuildingDoc",
    "PlaylistTrack",
    "OutlineGridColumn",
    "OutlineGridRow",
    "OutlineGridCell",
    "WritingSprint",
    "WritingSession",
    "Comment",
    "AppSettings",
    "AppDictionary",
]
