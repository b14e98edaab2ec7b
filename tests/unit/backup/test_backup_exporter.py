"""
Tests for BackupExporter and the serialization helpers.
"""
import json
from datetime import date, datetime, timezone

import pytest

from writr.backup import (
    BackupExporter,
    generate_backup_filename,
    parse_backup_file,
    serialize_backup,
)
from writr.core.exceptions import ExportError
from writr.database.schemas import AppDictionaryRecord, AppSettingsRecord

TS = "2024-03-01T12:00:00.000Z"
EXPORT_MOMENT = datetime(2024, 3, 5, 9, 15, 30, 250000, tzinfo=timezone.utc)
EXPORT_ISO = "2024-03-05T09:15:30.250Z"


@pytest.fixture
def exporter(test_db):
    """Exporter with a frozen clock."""
    return BackupExporter(test_db, clock=lambda: EXPORT_MOMENT)


class TestExportProject:
    def test_missing_project_returns_none(self, exporter, record_factory):
        assert exporter.export_project(record_factory.uuid()) is None

    def test_metadata(self, exporter, seed, minimal_graph):
        seed(minimal_graph)
        backup = exporter.export_project(minimal_graph.project.id)

        assert backup.metadata.version == 1
        assert backup.metadata.type == "project"
        assert backup.metadata.exported_at == EXPORT_ISO
        assert backup.metadata.project_title == "Test Novel"
        assert backup.metadata.project_count is None

    def test_graph_matches_store(self, exporter, seed, full_graph, graph_index):
        """Every collection comes back exactly as stored."""
        seed(full_graph)
        backup = exporter.export_project(full_graph.project.id)
        assert graph_index(backup.data) == graph_index(full_graph)

    def test_only_target_project(self, exporter, seed, make_minimal_graph):
        first = make_minimal_graph("First")
        second = make_minimal_graph("Second")
        seed(first)
        seed(second)

        backup = exporter.export_project(first.project.id)
        assert {ch.project_id for ch in backup.data.chapters} == {first.project.id}
        assert len(backup.data.characters) == 2

    def test_empty_collections_present(self, exporter, seed, make_minimal_graph):
        graph = make_minimal_graph()
        seed(graph)
        backup = exporter.export_project(graph.project.id)

        assert backup.data.comments == []
        assert backup.data.project_dictionary is None

    def test_gather_project_data(self, exporter, seed, minimal_graph):
        seed(minimal_graph)
        graph = exporter.gather_project_data(minimal_graph.project.id)
        assert graph.project == minimal_graph.project


class TestExportFullBackup:
    def test_empty_store(self, exporter):
        backup = exporter.export_full_backup()

        assert backup.metadata.type == "full"
        assert backup.metadata.project_count == 0
        assert backup.projects == []
        assert backup.app_settings is None
        assert backup.app_dictionary is None

    def test_all_projects_and_singletons(self, test_db, exporter, seed, make_minimal_graph):
        seed(make_minimal_graph("One"))
        seed(make_minimal_graph("Two"))
        with test_db.session_scope() as session:
            collections = test_db.collections(session)
            collections.app_settings.put(AppSettingsRecord(theme="dark", updated_at=TS))
            collections.app_dictionary.put(AppDictionaryRecord(words=["Quorth"], updated_at=TS))

        backup = exporter.export_full_backup()

        assert backup.metadata.project_count == 2
        assert sorted(g.project.title for g in backup.projects) == ["One", "Two"]
        assert backup.app_settings.theme == "dark"
        assert backup.app_dictionary.words == ["Quorth"]


class TestSerializeBackup:
    def test_camel_case_and_indent(self, exporter, seed, minimal_graph):
        seed(minimal_graph)
        text = serialize_backup(exporter.export_project(minimal_graph.project.id))

        assert text.startswith('{\n  "metadata": {\n    "version": 1,')
        doc = json.loads(text)
        assert doc["metadata"]["exportedAt"] == EXPORT_ISO
        assert doc["metadata"]["projectTitle"] == "Test Novel"
        assert "projectCount" not in doc["metadata"]
        assert "characterRelationships" in doc["data"]
        assert doc["data"]["chapters"][0]["projectId"] == minimal_graph.project.id

    def test_absent_optionals_omitted(self, exporter, seed, minimal_graph):
        seed(minimal_graph)
        doc = json.loads(serialize_backup(exporter.export_project(minimal_graph.project.id)))
        assert "projectDictionary" not in doc["data"]

        full = json.loads(serialize_backup(exporter.export_full_backup()))
        assert "appSettings" not in full
        assert "appDictionary" not in full
        assert "projectTitle" not in full["metadata"]
        assert full["metadata"]["projectCount"] == 1

    def test_output_parses_back(self, exporter, seed, full_graph, graph_index):
        seed(full_graph)
        backup = exporter.export_project(full_graph.project.id)
        assert graph_index(parse_backup_file(serialize_backup(backup)).data) == graph_index(full_graph)


class TestGenerateBackupFilename:
    def test_project_filename(self, exporter, seed, make_minimal_graph):
        graph = make_minimal_graph("My Novel: Part 1")
        seed(graph)
        backup = exporter.export_project(graph.project.id)
        assert generate_backup_filename(backup) == "writr-my-novel-part-1-2024-03-05.json"

    def test_full_filename(self, exporter):
        backup = exporter.export_full_backup()
        assert generate_backup_filename(backup) == "writr-full-backup-2024-03-05.json"

    def test_explicit_date(self, exporter):
        backup = exporter.export_full_backup()
        assert (
            generate_backup_filename(backup, on=date(2023, 12, 31))
            == "writr-full-backup-2023-12-31.json"
        )


class TestDownload:
    def test_project_written_and_stamped(self, test_db, exporter, seed, minimal_graph, tmp_dir):
        seed(minimal_graph)
        path = exporter.download_project_backup(minimal_graph.project.id, tmp_dir / "out")

        assert path == tmp_dir / "out" / "writr-test-novel-2024-03-05.json"
        assert parse_backup_file(path.read_text(encoding="utf-8")).data.project == minimal_graph.project

        with test_db.session_scope() as session:
            settings = test_db.collections(session).app_settings.get("app-settings")
        assert settings.last_exported_at == EXPORT_ISO

    def test_missing_project_raises(self, exporter, record_factory, tmp_dir):
        with pytest.raises(ExportError, match="Project not found"):
            exporter.download_project_backup(record_factory.uuid(), tmp_dir / "out")
        assert not (tmp_dir / "out").exists()

    def test_full_written(self, exporter, seed, minimal_graph, tmp_dir):
        seed(minimal_graph)
        path = exporter.download_full_backup(tmp_dir)

        assert path.name == "writr-full-backup-2024-03-05.json"
        assert len(parse_backup_file(path.read_bytes()).projects) == 1

    def test_stamp_keeps_existing_settings(self, test_db, exporter, tmp_dir):
        with test_db.session_scope() as session:
            test_db.collections(session).app_settings.put(
                AppSettingsRecord(theme="dark", editor_font_size=20, updated_at=TS)
            )

        exporter.download_full_backup(tmp_dir)

        with test_db.session_scope() as session:
            settings = test_db.collections(session).app_settings.get("app-settings")
        assert settings.theme == "dark"
        assert settings.editor_font_size == 20
        assert settings.last_exported_at == EXPORT_ISO

    def test_unwritable_directory(self, exporter, tmp_dir):
        blocker = tmp_dir / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(ExportError, match="Cannot write backup"):
            exporter.download_full_backup(blocker)
