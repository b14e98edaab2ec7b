#!/usr/bin/env python3
"""
types.py
--------------------
Backup document shapes and import bookkeeping types.

Document layout (camelCase on the wire):

    project backup:
        {"metadata": {"version", "type": "project", "exportedAt", "projectTitle"},
         "data": ProjectGraph}

    full backup:
        {"metadata": {"version", "type": "full", "exportedAt", "projectCount"},
         "appSettings"?, "appDictionary"?, "projects": [ProjectGraph, ...]}

`Backup` is the closed union of both shapes, tagged by metadata.type.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Dict, Iterator, List, Literal, Optional, Tuple, Union

# --- Third party ---
from pydantic import Discriminator, Field, Tag

# --- Local imports ---
from writr.core.exceptions import ValidationError
from writr.database.collections import PROJECT_COLLECTIONS
from writr.database.schemas import (
    AppDictionaryRecord,
    AppSettingsRecord,
    ChapterRecord,
    ChapterSnapshotRecord,
    CharacterRecord,
    CharacterRelationshipRecord,
    CommentRecord,
    LocationRecord,
    OutlineGridCellRecord,
    OutlineGridColumnRecord,
    OutlineGridRowRecord,
    PlaylistTrackRecord,
    ProjectDictionaryRecord,
    ProjectRecord,
    Record,
    StyleGuideEntryRecord,
    TimelineEventRecord,
    Timestamp,
    WorldbuildingDocRecord,
    WritingSessionRecord,
    WritingSprintRecord,
)

BACKUP_VERSION = 1
APP_NAME = "writr"

BackupType = Literal["project", "full"]

# The one project-scoped collection held as a single optional record
PROJECT_DICTIONARY_COLLECTION = "project_dictionaries"

# Graph list fields, in insertion order; each is named after its collection
LIST_COLLECTIONS: Tuple[str, ...] = tuple(
    config.name
    for config in PROJECT_COLLECTIONS
    if config.name != PROJECT_DICTIONARY_COLLECTION
)


# ----- Project graph -----
class ProjectGraph(Record):
    """
    Snapshot of one project's complete row set.

    Every list is scoped to ``project.id``. Built transiently by the
    gatherer and consumed by the exporter or importer; never stored as-is.
    """

    omit_when_none = ("project_dictionary",)

    project: ProjectRecord
    chapters: List[ChapterRecord]
    characters: List[CharacterRecord]
    character_relationships: List[CharacterRelationshipRecord]
    locations: List[LocationRecord]
    timeline_events: List[TimelineEventRecord]
    style_guide_entries: List[StyleGuideEntryRecord]
    worldbuilding_docs: List[WorldbuildingDocRecord]
    outline_grid_columns: List[OutlineGridColumnRecord]
    outline_grid_rows: List[OutlineGridRowRecord]
    outline_grid_cells: List[OutlineGridCellRecord]
    writing_sprints: List[WritingSprintRecord]
    writing_sessions: List[WritingSessionRecord]
    playlist_tracks: List[PlaylistTrackRecord]
    comments: List[CommentRecord]
    chapter_snapshots: List[ChapterSnapshotRecord] = Field(default_factory=list)
    project_dictionary: Optional[ProjectDictionaryRecord] = None

    def iter_collections(self) -> Iterator[Tuple[str, List[Record]]]:
        """Yield (collection name, records) for every list collection."""
        for name in LIST_COLLECTIONS:
            yield name, getattr(self, name)

    def iter_records(self) -> Iterator[Record]:
        """Every dependent record, collection by collection; the project excluded."""
        for _, records in self.iter_collections():
            yield from records
        if self.project_dictionary is not None:
            yield self.project_dictionary

    def entity_count(self) -> int:
        return 1 + sum(1 for _ in self.iter_records())


# ----- Envelopes -----
class BackupMetadata(Record):
    omit_when_none = ("project_count", "project_title")

    version: Annotated[int, Field(gt=0, strict=True)]
    type: BackupType
    exported_at: Timestamp
    project_count: Optional[Annotated[int, Field(ge=0)]] = None
    project_title: Optional[str] = None


class ProjectBackupMetadata(BackupMetadata):
    type: Literal["project"] = "project"


class FullBackupMetadata(BackupMetadata):
    type: Literal["full"] = "full"


class ProjectBackup(Record):
    metadata: ProjectBackupMetadata
    data: ProjectGraph


class FullBackup(Record):
    omit_when_none = ("app_settings", "app_dictionary")

    metadata: FullBackupMetadata
    app_settings: Optional[AppSettingsRecord] = None
    app_dictionary: Optional[AppDictionaryRecord] = None
    projects: List[ProjectGraph]


def _backup_kind(value: Any) -> Optional[str]:
    """Read metadata.type from a raw mapping or a built envelope."""
    if isinstance(value, dict):
        metadata = value.get("metadata")
        kind = metadata.get("type") if isinstance(metadata, dict) else None
    else:
        kind = getattr(getattr(value, "metadata", None), "type", None)
    return kind if kind in ("project", "full") else None


Backup = Annotated[
    Union[
        Annotated[ProjectBackup, Tag("project")],
        Annotated[FullBackup, Tag("full")],
    ],
    Discriminator(
        _backup_kind,
        custom_error_type="invalid_backup_type",
        custom_error_message="metadata.type must be 'project' or 'full'",
    ),
]


# ----- Import bookkeeping -----
class ConflictResolution(str, Enum):
    """
    What to do when an imported project id already exists locally.

    - SKIP: leave the local project untouched
    - REPLACE: erase the local project and insert the incoming one
    - DUPLICATE: insert the incoming project under fresh identifiers
    """

    SKIP = "skip"
    REPLACE = "replace"
    DUPLICATE = "duplicate"

    @classmethod
    def choices(cls) -> List[str]:
        return [resolution.value for resolution in cls]


class ImportOutcome(str, Enum):
    IMPORTED = "imported"
    SKIPPED = "skipped"
    REPLACED = "replaced"


@dataclass
class ImportOptions:
    """
    Caller choices for one import.

    Attributes:
        conflict_resolution: Policy for projects that already exist
        restore_settings: Overwrite app settings and dictionary from a
            full backup
    """

    conflict_resolution: ConflictResolution = ConflictResolution.SKIP
    restore_settings: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.conflict_resolution, ConflictResolution):
            try:
                self.conflict_resolution = ConflictResolution(self.conflict_resolution)
            except ValueError as e:
                raise ValidationError(
                    f"Invalid conflict resolution: {self.conflict_resolution!r}. "
                    f"Choose from {ConflictResolution.choices()}"
                ) from e


@dataclass
class ImportResult:
    """
    Summary of one import call.

    When ``success`` is False every write was rolled back; the counters
    still report how far the import got before it failed.
    """

    success: bool = False
    projects_imported: int = 0
    projects_skipped: int = 0
    projects_replaced: int = 0
    settings_restored: bool = False
    errors: List[str] = field(default_factory=list)

    def record(self, outcome: ImportOutcome) -> None:
        if outcome is ImportOutcome.SKIPPED:
            self.projects_skipped += 1
            return
        self.projects_imported += 1
        if outcome is ImportOutcome.REPLACED:
            self.projects_replaced += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "projectsImported": self.projects_imported,
            "projectsSkipped": self.projects_skipped,
            "projectsReplaced": self.projects_replaced,
            "settingsRestored": self.settings_restored,
            "errors": list(self.errors),
        }
