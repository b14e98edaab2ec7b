"""
conftest.py
-----------
Shared pytest fixtures for writr tests.

Provides fixtures for:
- Temporary directories and database setup
- Record factories
- Project graph builders (minimal and fully populated)
"""
import uuid
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Optional

import pytest

from writr.backup.importer import insert_project_graph
from writr.backup.types import (
    FullBackup,
    FullBackupMetadata,
    ProjectBackup,
    ProjectBackupMetadata,
    ProjectGraph,
)
from writr.database import WritrDB
from writr.database.schemas import (
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
    StyleGuideEntryRecord,
    TimelineEventRecord,
    WorldbuildingDocRecord,
    WritingSessionRecord,
    WritingSprintRecord,
)

TS = "2024-03-01T12:00:00.000Z"
LATER = "2024-03-02T08:30:00.000Z"


def new_id() -> str:
    return str(uuid.uuid4())


# ----- Record factories -----

def create_project(project_id: Optional[str] = None, title: str = "Test Novel", **overrides):
    values = dict(
        id=project_id or new_id(),
        title=title,
        description="A story about testing",
        genre="Literary",
        target_word_count=80000,
        created_at=TS,
        updated_at=TS,
    )
    values.update(overrides)
    return ProjectRecord(**values)


def create_chapter(project_id: str, title: str = "Chapter 1", order: int = 0, **overrides):
    values = dict(
        id=new_id(),
        project_id=project_id,
        title=title,
        order=order,
        content="<p>It was a dark and stormy night.</p>",
        synopsis="Opening",
        status="draft",
        word_count=7,
        created_at=TS,
        updated_at=TS,
    )
    values.update(overrides)
    return ChapterRecord(**values)


def create_character(project_id: str, name: str, **overrides):
    values = dict(
        id=new_id(),
        project_id=project_id,
        name=name,
        role="protagonist",
        aliases=[name.lower()],
        created_at=TS,
        updated_at=TS,
    )
    values.update(overrides)
    return CharacterRecord(**values)


def create_relationship(project_id: str, source_id: str, target_id: str, **overrides):
    values = dict(
        id=new_id(),
        project_id=project_id,
        source_character_id=source_id,
        target_character_id=target_id,
        type="spouse",
        created_at=TS,
        updated_at=TS,
    )
    values.update(overrides)
    return CharacterRelationshipRecord(**values)


# ----- Graph builders -----

def build_minimal_graph(title: str = "Test Novel", project_id: Optional[str] = None) -> ProjectGraph:
    """Project with 1 chapter, 2 characters and 1 relationship."""
    project = create_project(project_id, title=title)
    chapter = create_chapter(project.id)
    alice = create_character(project.id, "Alice")
    bob = create_character(project.id, "Bob", role="supporting")
    return ProjectGraph(
        project=project,
        chapters=[chapter],
        characters=[alice, bob],
        character_relationships=[create_relationship(project.id, alice.id, bob.id)],
        locations=[],
        timeline_events=[],
        style_guide_entries=[],
        worldbuilding_docs=[],
        outline_grid_columns=[],
        outline_grid_rows=[],
        outline_grid_cells=[],
        writing_sprints=[],
        writing_sessions=[],
        playlist_tracks=[],
        comments=[],
    )


def build_full_graph(title: str = "Test Novel", project_id: Optional[str] = None) -> ProjectGraph:
    """Project with at least one record in every collection and every reference kind used."""
    project = create_project(project_id, title=title)
    pid = project.id

    ch1 = create_chapter(pid, "Chapter 1", 0)
    ch2 = create_chapter(pid, "Chapter 2", 1, status="revised")

    city = LocationRecord(
        id=new_id(), project_id=pid, name="Harbor City", created_at=TS, updated_at=TS
    )
    alice = create_character(pid, "Alice", linked_location_ids=[city.id], images=["data:image/png;base64,AAA"])
    bob = create_character(
        pid, "Bob", role="antagonist", linked_character_ids=[alice.id], linked_location_ids=[city.id]
    )
    alice = alice.model_copy(update={"linked_character_ids": [bob.id]})
    city = city.model_copy(update={"linked_character_ids": [alice.id]})
    dock = LocationRecord(
        id=new_id(),
        project_id=pid,
        name="The Docks",
        parent_location_id=city.id,
        linked_character_ids=[bob.id],
        created_at=TS,
        updated_at=TS,
    )

    lore = WorldbuildingDocRecord(
        id=new_id(), project_id=pid, title="Magic System", tags=["magic"], created_at=TS, updated_at=TS
    )
    sublore = WorldbuildingDocRecord(
        id=new_id(),
        project_id=pid,
        title="Costs",
        parent_doc_id=lore.id,
        order=1,
        linked_character_ids=[alice.id],
        linked_location_ids=[dock.id],
        created_at=TS,
        updated_at=TS,
    )

    column = OutlineGridColumnRecord(
        id=new_id(), project_id=pid, title="Main Plot", order=0, created_at=TS, updated_at=TS
    )
    row = OutlineGridRowRecord(
        id=new_id(), project_id=pid, linked_chapter_id=ch1.id, label="Beat 1", order=0,
        created_at=TS, updated_at=TS,
    )
    free_row = OutlineGridRowRecord(
        id=new_id(), project_id=pid, label="Unassigned", order=1, created_at=TS, updated_at=TS
    )

    return ProjectGraph(
        project=project,
        chapters=[ch1, ch2],
        characters=[alice, bob],
        character_relationships=[
            create_relationship(pid, alice.id, bob.id),
            create_relationship(pid, bob.id, alice.id, type="custom", custom_label="rival"),
        ],
        locations=[city, dock],
        timeline_events=[
            TimelineEventRecord(
                id=new_id(), project_id=pid, title="The Storm", date="Year 3, Spring", order=0,
                linked_chapter_ids=[ch1.id], linked_character_ids=[alice.id, bob.id],
                created_at=TS, updated_at=TS,
            )
        ],
        style_guide_entries=[
            StyleGuideEntryRecord(
                id=new_id(), project_id=pid, category="tense", title="Past tense", order=0,
                content="Always past tense.", created_at=TS, updated_at=TS,
            )
        ],
        worldbuilding_docs=[lore, sublore],
        outline_grid_columns=[column],
        outline_grid_rows=[row, free_row],
        outline_grid_cells=[
            OutlineGridCellRecord(
                id=new_id(), project_id=pid, row_id=row.id, column_id=column.id,
                content="Storm hits", color="blue", created_at=TS, updated_at=TS,
            )
        ],
        writing_sprints=[
            WritingSprintRecord(
                id=new_id(), project_id=pid, chapter_id=ch1.id, duration_ms=1_500_000,
                word_count_goal=500, status="completed", started_at=TS, ended_at=LATER,
                start_word_count=0, end_word_count=512, created_at=TS, updated_at=LATER,
            )
        ],
        writing_sessions=[
            WritingSessionRecord(
                id=new_id(), project_id=pid, chapter_id=ch1.id, date="2024-03-01", hour_of_day=12,
                word_count_start=0, word_count_end=512, duration_ms=1_500_000,
                created_at=TS, updated_at=LATER,
            )
        ],
        playlist_tracks=[
            PlaylistTrackRecord(
                id=new_id(), project_id=pid, title="Rain Sounds", url="https://example.com/rain",
                source="youtube", duration=3600, created_at=TS, updated_at=TS,
            )
        ],
        comments=[
            CommentRecord(
                id=new_id(), project_id=pid, chapter_id=ch1.id, content="Tighten this",
                from_offset=3, to_offset=12, anchor_text="dark and", created_at=TS, updated_at=TS,
            )
        ],
        chapter_snapshots=[
            ChapterSnapshotRecord(
                id=new_id(), chapter_id=ch1.id, project_id=pid, name="Before edits",
                content="<p>Draft zero</p>", word_count=2, created_at=TS,
            )
        ],
        project_dictionary=ProjectDictionaryRecord(
            id=new_id(), project_id=pid, words=["Alyndra", "Quorth"], created_at=TS, updated_at=TS
        ),
    )


# ----- Envelope builders -----

def build_project_backup(graph: ProjectGraph, exported_at: str = TS) -> ProjectBackup:
    return ProjectBackup(
        metadata=ProjectBackupMetadata(
            version=1, exported_at=exported_at, project_title=graph.project.title
        ),
        data=graph,
    )


def build_full_backup(graphs, app_settings=None, app_dictionary=None, exported_at: str = TS) -> FullBackup:
    graphs = list(graphs)
    return FullBackup(
        metadata=FullBackupMetadata(
            version=1, exported_at=exported_at, project_count=len(graphs)
        ),
        app_settings=app_settings,
        app_dictionary=app_dictionary,
        projects=graphs,
    )


def index_graph(graph: ProjectGraph):
    """Graph as {collection: {id: record}} for order-insensitive comparison."""
    index = {"projects": {graph.project.id: graph.project}}
    for name, records in graph.iter_collections():
        index[name] = {record.id: record for record in records}
    dictionary = graph.project_dictionary
    index["project_dictionaries"] = {dictionary.id: dictionary} if dictionary else {}
    return index


def seed_graph(db: WritrDB, graph: ProjectGraph) -> None:
    """Insert a graph directly, bypassing the importer's conflict handling."""
    with db.session_scope() as session:
        insert_project_graph(db.collections(session), graph)


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ----- Database Fixtures -----

@pytest.fixture
def test_db_path(tmp_dir):
    """Path to a throwaway SQLite file."""
    return tmp_dir / "test_writr.db"


@pytest.fixture
def test_db(test_db_path):
    """
    Create a fresh database for testing.

    Returns a WritrDB instance with every table created.
    """
    db = WritrDB(db_path=test_db_path)
    yield db
    db.dispose()


@pytest.fixture
def db_session(test_db):
    """Open session; committed when the test finishes without error."""
    with test_db.session_scope() as session:
        yield session


@pytest.fixture
def collections(test_db, db_session):
    """Collection managers bound to db_session."""
    return test_db.collections(db_session)


@pytest.fixture
def minimal_graph():
    return build_minimal_graph()


@pytest.fixture
def full_graph():
    return build_full_graph()


@pytest.fixture
def make_minimal_graph():
    """Builder for minimal graphs: make_minimal_graph(title=..., project_id=...)."""
    return build_minimal_graph


@pytest.fixture
def make_full_graph():
    """Builder for fully populated graphs."""
    return build_full_graph


@pytest.fixture
def seed(test_db):
    """Insert a graph into test_db: seed(graph)."""
    return lambda graph: seed_graph(test_db, graph)


@pytest.fixture
def record_factory():
    """Access to the individual record factories."""
    class Factories:
        project = staticmethod(create_project)
        chapter = staticmethod(create_chapter)
        character = staticmethod(create_character)
        relationship = staticmethod(create_relationship)
        uuid = staticmethod(new_id)

    return Factories


@pytest.fixture
def make_project_backup():
    """Wrap a graph in a version-1 project backup."""
    return build_project_backup


@pytest.fixture
def make_full_backup():
    """Wrap graphs (and optional singletons) in a version-1 full backup."""
    return build_full_backup


@pytest.fixture
def graph_index():
    """index_graph(graph) -> {collection: {id: record}}."""
    return index_graph
