#!/usr/bin/env python3
"""
collections.py
--------------------
Registry of every collection in the store and the per-session set of
managers built from it.

Project-scoped collections are listed in dependency order (parents before
the rows that reference them); inserts and deletes walk this list.
"""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from sqlalchemy.orm import Session

from writr.core.logging_manager import WritrLogger, safe_logger
from . import models, schemas
from .managers import CollectionConfig, CollectionManager


def _settings_from_row(row: models.AppSettings) -> schemas.AppSettingsRecord:
    return schemas.AppSettingsRecord.model_validate(
        {**(row.payload or {}), "id": row.id, "updatedAt": row.updated_at}
    )


def _settings_to_row(record: schemas.AppSettingsRecord) -> models.AppSettings:
    payload = record.model_dump(
        by_alias=True, mode="json", exclude={"id", "updated_at"}
    )
    return models.AppSettings(id=record.id, payload=payload, updated_at=record.updated_at)


PROJECTS = CollectionConfig("projects", models.Project, schemas.ProjectRecord, project_scoped=False)

PROJECT_COLLECTIONS: List[CollectionConfig] = [
    CollectionConfig("chapters", models.Chapter, schemas.ChapterRecord),
    CollectionConfig("characters", models.Character, schemas.CharacterRecord),
    CollectionConfig(
        "character_relationships",
        models.CharacterRelationship,
        schemas.CharacterRelationshipRecord,
    ),
    CollectionConfig("locations", models.Location, schemas.LocationRecord),
    CollectionConfig("timeline_events", models.TimelineEvent, schemas.TimelineEventRecord),
    CollectionConfig(
        "style_guide_entries", models.StyleGuideEntry, schemas.StyleGuideEntryRecord
    ),
    CollectionConfig(
        "worldbuilding_docs", models.WorldbuildingDoc, schemas.WorldbuildingDocRecord
    ),
    CollectionConfig(
        "outline_grid_columns", models.OutlineGridColumn, schemas.OutlineGridColumnRecord
    ),
    CollectionConfig("outline_grid_rows", models.OutlineGridRow, schemas.OutlineGridRowRecord),
    CollectionConfig(
        "outline_grid_cells", models.OutlineGridCell, schemas.OutlineGridCellRecord
    ),
    CollectionConfig("writing_sprints", models.WritingSprint, schemas.WritingSprintRecord),
    CollectionConfig("writing_sessions", models.WritingSession, schemas.WritingSessionRecord),
    CollectionConfig("playlist_tracks", models.PlaylistTrack, schemas.PlaylistTrackRecord),
    CollectionConfig("comments", models.Comment, schemas.CommentRecord),
    CollectionConfig(
        "chapter_snapshots", models.ChapterSnapshot, schemas.ChapterSnapshotRecord
    ),
    CollectionConfig(
        "project_dictionaries", models.ProjectDictionary, schemas.ProjectDictionaryRecord
    ),
]

APP_SETTINGS = CollectionConfig(
    "app_settings",
    models.AppSettings,
    schemas.AppSettingsRecord,
    project_scoped=False,
    to_row=_settings_to_row,
    from_row=_settings_from_row,
)
APP_DICTIONARY = CollectionConfig(
    "app_dictionary", models.AppDictionary, schemas.AppDictionaryRecord, project_scoped=False
)

ALL_COLLECTIONS: List[CollectionConfig] = [
    PROJECTS,
    *PROJECT_COLLECTIONS,
    APP_SETTINGS,
    APP_DICTIONARY,
]


class CollectionSet:
    """
    One CollectionManager per collection, all bound to the same session.

    Managers are reachable as attributes named after their collection
    (``collections.chapters``) or by subscription (``collections["chapters"]``).
    Everything done through one set shares the session's transaction.
    """

    projects: CollectionManager
    chapters: CollectionManager
    characters: CollectionManager
    character_relationships: CollectionManager
    locations: CollectionManager
    timeline_events: CollectionManager
    style_guide_entries: CollectionManager
    worldbuilding_docs: CollectionManager
    outline_grid_columns: CollectionManager
    outline_grid_rows: CollectionManager
    outline_grid_cells: CollectionManager
    writing_sprints: CollectionManager
    writing_sessions: CollectionManager
    playlist_tracks: CollectionManager
    comments: CollectionManager
    chapter_snapshots: CollectionManager
    project_dictionaries: CollectionManager
    app_settings: CollectionManager
    app_dictionary: CollectionManager

    def __init__(self, session: Session, logger: Optional[WritrLogger] = None):
        self.session = session
        self.logger = logger
        self._managers: Dict[str, CollectionManager] = {}
        for config in ALL_COLLECTIONS:
            manager = CollectionManager(session, logger, config)
            self._managers[config.name] = manager
            setattr(self, config.name, manager)

    def __getitem__(self, name: str) -> CollectionManager:
        return self._managers[name]

    def __iter__(self) -> Iterator[CollectionManager]:
        return iter(self._managers.values())

    def project_scoped(self) -> List[CollectionManager]:
        """Managers for every project-scoped collection, parents first."""
        return [self._managers[config.name] for config in PROJECT_COLLECTIONS]

    def delete_all_project_data(self, project_id: str) -> Dict[str, int]:
        """
        Delete every row belonging to a project, then the project itself.

        Children are removed in reverse dependency order. Nothing is
        committed here; the caller's transaction decides.

        Args:
            project_id: Identifier of the project to erase

        Returns:
            Rows deleted per collection (only collections that had rows)
        """
        deleted: Dict[str, int] = {}
        for manager in reversed(self.project_scoped()):
            count = manager.delete_where_project(project_id)
            if count:
                deleted[manager.config.name] = count
        if self.projects.delete(project_id):
            deleted["projects"] = 1

        safe_logger(self.logger).log_debug(
            "Deleted project data", {"project_id": project_id, "deleted": deleted}
        )
        return deleted
