#!/usr/bin/env python3
"""
schemas.py
--------------------
Structural definitions for every record that crosses the store boundary.

Records are pydantic models with snake_case attributes (matching the ORM
columns) and camelCase aliases (matching the backup document format).
They are the only shape handed out by the collection managers and the
only shape the backup engine reads or writes.

Reference kinds:
    Every identifier-bearing field declares how it participates in the
    project graph through an annotation, so the ID remapper never has to
    know which collection it is looking at:

    - RecordId:    the record's own identifier
    - ProjectRef:  owning project; always rewritten to the new project
    - StrictRef:   required sibling reference; must resolve in the graph
    - OptionalRef: nullable reference; passes through when unresolved
    - RefList:     list of references; unresolved elements pass through

Usage:
    from writr.database.schemas import ChapterRecord, reference_fields

    chapter = ChapterRecord.model_validate(payload)
    reference_fields(ChapterRecord)
    # {'id': RefKind.OWN_ID, 'project_id': RefKind.PROJECT}
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Tuple, Type

# --- Third party ---
from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

# --- Local imports ---
from writr.core.validators import DataValidator


APP_SETTINGS_ID = "app-settings"
APP_DICTIONARY_ID = "app-dictionary"


# ----- Reference kinds -----
class RefKind(str, Enum):
    """How an identifier field is treated when a graph is re-keyed."""

    OWN_ID = "own_id"
    PROJECT = "project"
    STRICT = "strict"
    OPTIONAL = "optional"
    LIST = "list"

    @classmethod
    def choices(cls) -> List[str]:
        return [kind.value for kind in cls]


@dataclass(frozen=True)
class RefField:
    """Annotation marker carrying a field's reference kind."""

    kind: RefKind


Uuid = Annotated[str, AfterValidator(DataValidator.validate_uuid)]
Timestamp = Annotated[str, AfterValidator(DataValidator.validate_iso_datetime)]
CalendarDate = Annotated[str, AfterValidator(DataValidator.validate_iso_date)]

RecordId = Annotated[Uuid, RefField(RefKind.OWN_ID)]
ProjectRef = Annotated[Uuid, RefField(RefKind.PROJECT)]
StrictRef = Annotated[Uuid, RefField(RefKind.STRICT)]
OptionalRef = Annotated[Optional[Uuid], RefField(RefKind.OPTIONAL)]
RefList = Annotated[List[Uuid], RefField(RefKind.LIST)]

NonNegativeInt = Annotated[int, Field(ge=0)]


@lru_cache(maxsize=None)
def _reference_fields(model: Type[BaseModel]) -> Tuple[Tuple[str, RefKind], ...]:
    found = []
    for name, info in model.model_fields.items():
        for marker in info.metadata:
            if isinstance(marker, RefField):
                found.append((name, marker.kind))
                break
    return tuple(found)


def reference_fields(model: Type[BaseModel]) -> Dict[str, RefKind]:
    """
    Map each reference-bearing field of a record class to its kind.

    Args:
        model: Record class (e.g. CharacterRecord)

    Returns:
        Ordered dict of field name -> RefKind, in declaration order
    """
    return dict(_reference_fields(model))


# ----- Base record -----
class Record(BaseModel):
    """
    Base for every stored record.

    Accepts camelCase (document) or snake_case (ORM) keys, ignores keys it
    does not know, and emits camelCase when dumped with by_alias=True.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Field names dropped from output when their value is None
    omit_when_none: ClassVar[Tuple[str, ...]] = ()

    @model_serializer(mode="wrap")
    def drop_absent_optionals(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        for name in self.omit_when_none:
            alias = type(self).model_fields[name].alias or name
            for key in (name, alias):
                if key in data and data[key] is None:
                    del data[key]
        return data


# ----- Enumerations -----
ChapterStatus = Literal["draft", "revised", "final"]
CharacterRole = Literal["protagonist", "antagonist", "supporting", "minor"]
RelationshipType = Literal["parent", "child", "spouse", "divorced", "sibling", "custom"]
StyleGuideCategory = Literal["voice", "pov", "tense", "formatting", "vocabulary", "custom"]
SprintStatus = Literal["active", "paused", "completed", "abandoned"]
CommentStatus = Literal["active", "resolved", "orphaned"]
Theme = Literal["light", "dark", "system"]


# ----- Project and manuscript -----
class ProjectRecord(Record):
    id: RecordId
    title: str = Field(min_length=1)
    description: str = ""
    genre: str = ""
    target_word_count: NonNegativeInt = 0
    created_at: Timestamp
    updated_at: Timestamp


class ChapterRecord(Record):
    id: RecordId
    project_id: ProjectRef
    title: str = Field(min_length=1)
    order: NonNegativeInt
    content: str = ""
    synopsis: str = ""
    status: ChapterStatus = "draft"
    word_count: NonNegativeInt = 0
    created_at: Timestamp
    updated_at: Timestamp


class ChapterSnapshotRecord(Record):
    id: RecordId
    chapter_id: StrictRef
    project_id: ProjectRef
    name: str = ""
    content: str = ""
    word_count: NonNegativeInt = 0
    created_at: Timestamp


class ProjectDictionaryRecord(Record):
    id: RecordId
    project_id: ProjectRef
    words: List[str] = Field(default_factory=list)
    created_at: Timestamp
    updated_at: Timestamp


# ----- Story bible -----
class CharacterRecord(Record):
    id: RecordId
    project_id: ProjectRef
    name: str = Field(min_length=1)
    role: CharacterRole = "supporting"
    pronouns: str = ""
    aliases: List[str] = Field(default_factory=list)
    description: str = ""
    personality: str = ""
    motivations: str = ""
    internal_conflict: str = ""
    strengths: str = ""
    weaknesses: str = ""
    character_arcs: str = ""
    dialogue_style: str = ""
    backstory: str = ""
    notes: str = ""
    linked_character_ids: RefList = Field(default_factory=list)
    linked_location_ids: RefList = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    created_at: Timestamp
    updated_at: Timestamp


class CharacterRelationshipRecord(Record):
    id: RecordId
    project_id: ProjectRef
    source_character_id: StrictRef
    target_character_id: StrictRef
    type: RelationshipType
    custom_label: str = ""
    created_at: Timestamp
    updated_at: Timestamp


class LocationRecord(Record):
    id: RecordId
    project_id: ProjectRef
    name: str = Field(min_length=1)
    description: str = ""
    parent_location_id: OptionalRef = None
    notes: str = ""
    linked_character_ids: RefList = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    created_at: Timestamp
    updated_at: Timestamp


class TimelineEventRecord(Record):
    id: RecordId
    project_id: ProjectRef
    title: str = Field(min_length=1)
    description: str = ""
    date: str = ""
    order: NonNegativeInt
    linked_chapter_ids: RefList = Field(default_factory=list)
    linked_character_ids: RefList = Field(default_factory=list)
    created_at: Timestamp
    updated_at: Timestamp


class StyleGuideEntryRecord(Record):
    id: RecordId
    project_id: ProjectRef
    category: StyleGuideCategory = "custom"
    title: str = Field(min_length=1)
    content: str = ""
    order: NonNegativeInt
    created_at: Timestamp
    updated_at: Timestamp


class WorldbuildingDocRecord(Record):
    id: RecordId
    project_id: ProjectRef
    title: str = Field(min_length=1)
    content: str = ""
    tags: List[str] = Field(default_factory=list)
    parent_doc_id: OptionalRef = None
    order: NonNegativeInt = 0
    linked_character_ids: RefList = Field(default_factory=list)
    linked_location_ids: RefList = Field(default_factory=list)
    created_at: Timestamp
    updated_at: Timestamp


class PlaylistTrackRecord(Record):
    id: RecordId
    project_id: ProjectRef
    title: str = ""
    url: str = Field(min_length=1)
    source: str = ""
    thumbnail_url: str = ""
    duration: NonNegativeInt = 0
    order: NonNegativeInt = 0
    created_at: Timestamp
    updated_at: Timestamp


# ----- Outline grid -----
class OutlineGridColumnRecord(Record):
    id: RecordId
    project_id: ProjectRef
    title: str = ""
    order: NonNegativeInt
    width: int = Field(default=200, gt=0)
    created_at: Timestamp
    updated_at: Timestamp


class OutlineGridRowRecord(Record):
    id: RecordId
    project_id: ProjectRef
    linked_chapter_id: OptionalRef = None
    label: str = ""
    order: NonNegativeInt
    created_at: Timestamp
    updated_at: Timestamp


class OutlineGridCellRecord(Record):
    id: RecordId
    project_id: ProjectRef
    row_id: StrictRef
    column_id: StrictRef
    content: str = ""
    color: str = "white"
    created_at: Timestamp
    updated_at: Timestamp


# ----- Writing activity -----
class WritingSprintRecord(Record):
    id: RecordId
    # Nullable in the store (global sprints); rewritten like any project ref
    project_id: Annotated[Optional[Uuid], RefField(RefKind.PROJECT)] = None
    chapter_id: OptionalRef = None
    duration_ms: Annotated[int, Field(gt=0)]
    word_count_goal: Optional[Annotated[int, Field(gt=0)]] = None
    status: SprintStatus = "active"
    started_at: Timestamp
    paused_at: Optional[Timestamp] = None
    ended_at: Optional[Timestamp] = None
    total_paused_ms: NonNegativeInt = 0
    start_word_count: NonNegativeInt = 0
    end_word_count: Optional[NonNegativeInt] = None
    created_at: Timestamp
    updated_at: Timestamp


class WritingSessionRecord(Record):
    id: RecordId
    project_id: ProjectRef
    chapter_id: StrictRef
    date: CalendarDate
    hour_of_day: Annotated[int, Field(ge=0, le=23)]
    word_count_start: NonNegativeInt = 0
    word_count_end: NonNegativeInt = 0
    duration_ms: NonNegativeInt = 0
    created_at: Timestamp
    updated_at: Timestamp


class CommentRecord(Record):
    id: RecordId
    project_id: ProjectRef
    chapter_id: StrictRef
    content: str = ""
    color: str = "yellow"
    from_offset: NonNegativeInt
    to_offset: NonNegativeInt
    anchor_text: str = ""
    status: CommentStatus = "active"
    resolved_at: Optional[Timestamp] = None
    created_at: Timestamp
    updated_at: Timestamp


# ----- Process-wide singletons -----
PROVIDERS: Tuple[str, ...] = ("openrouter", "anthropic", "openai", "grok", "zai")

DEFAULT_PROVIDER_MODELS: Dict[str, str] = {
    "openrouter": "openai/gpt-4o",
    "anthropic": "claude-sonnet-4-5",
    "openai": "gpt-4o",
    "grok": "grok-3",
    "zai": "glm-4.6",
}

# Flat key used by older releases -> provider it belonged to
LEGACY_API_KEY_FIELDS: Dict[str, str] = {
    "openRouterApiKey": "openrouter",
    "anthropicApiKey": "anthropic",
    "openaiApiKey": "openai",
    "grokApiKey": "grok",
    "zaiApiKey": "zai",
}
LEGACY_MODEL_FIELD = "preferredModel"


def normalize_app_settings(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fold the flat per-provider fields of older settings into nested maps.

    Input that already carries ``providerApiKeys`` is returned as the very
    same object. Otherwise a new dict is built where:

    - each legacy ``<provider>ApiKey`` value lands in ``providerApiKeys``,
      with every known provider present (missing ones default to "")
    - ``preferredModel`` becomes ``providerModels["openrouter"]``; other
      providers keep their default model
    - the legacy keys are dropped

    Args:
        raw: Settings mapping as found in a backup document

    Returns:
        Settings mapping in the current nested layout

    Examples:
        >>> normalize_app_settings({"openRouterApiKey": "k"})["providerApiKeys"]["openrouter"]
        'k'
    """
    if "providerApiKeys" in raw or "provider_api_keys" in raw:
        return raw

    migrated = {
        key: value
        for key, value in raw.items()
        if key not in LEGACY_API_KEY_FIELDS and key != LEGACY_MODEL_FIELD
    }

    api_keys = {provider: "" for provider in PROVIDERS}
    for field_name, provider in LEGACY_API_KEY_FIELDS.items():
        value = raw.get(field_name)
        if isinstance(value, str):
            api_keys[provider] = value
    migrated["providerApiKeys"] = api_keys

    models = dict(DEFAULT_PROVIDER_MODELS)
    models.update(raw.get("providerModels") or {})
    if isinstance(raw.get(LEGACY_MODEL_FIELD), str):
        models["openrouter"] = raw[LEGACY_MODEL_FIELD]
    migrated["providerModels"] = models

    return migrated


class AppSettingsRecord(Record):
    """
    Process-wide preferences.

    Unknown keys are kept so preferences written by a newer release
    survive an import/export cycle untouched.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: Literal["app-settings"] = APP_SETTINGS_ID
    enable_ai_features: bool = True
    ai_provider: str = "openrouter"
    provider_api_keys: Dict[str, str] = Field(
        default_factory=lambda: {provider: "" for provider in PROVIDERS}
    )
    provider_models: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_PROVIDER_MODELS)
    )
    theme: Theme = "system"
    auto_save_interval_ms: Annotated[int, Field(gt=0)] = 3000
    editor_font_size: Annotated[int, Field(gt=0)] = 16
    editor_font: str = "literata"
    debug_mode: bool = False
    last_exported_at: Optional[Timestamp] = None
    updated_at: Timestamp

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_layout(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return normalize_app_settings(data)
        return data


class AppDictionaryRecord(Record):
    id: Literal["app-dictionary"] = APP_DICTIONARY_ID
    words: List[str] = Field(default_factory=list)
    updated_at: Timestamp
