#!/usr/bin/env python3
"""
exporter.py
--------------------
Export projects (or the whole store) as versioned backup documents.

Provides:
    - gather_project_data: one project's graph, or None
    - export_project: project backup envelope, or None
    - export_full_backup: every project plus the singleton rows
    - serialize_backup: pretty-printed UTF-8 JSON text
    - generate_backup_filename: writr-<slug>-<date>.json /
      writr-full-backup-<date>.json
    - download_project_backup / download_full_backup: write the document
      to a directory and stamp lastExportedAt on the app settings

Usage:
    exporter = BackupExporter(db)
    path = exporter.download_project_backup(project_id, Path("~/Backups"))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional, Union

# --- Local imports ---
from writr.core.exceptions import ExportError
from writr.core.logging_manager import WritrLogger, safe_logger
from writr.core.paths import EXPORT_DIR
from writr.database.decorators import log_database_operation
from writr.database.manager import WritrDB
from writr.database.schemas import APP_DICTIONARY_ID, APP_SETTINGS_ID
from writr.utils.slugify import slugify
from writr.utils.timestamps import now_iso, now_utc
from .gather import gather_all_project_graphs, gather_project_graph
from .settings import stamp_last_exported_at
from .types import (
    APP_NAME,
    BACKUP_VERSION,
    FullBackup,
    FullBackupMetadata,
    ProjectBackup,
    ProjectBackupMetadata,
    ProjectGraph,
)


def serialize_backup(backup: Union[ProjectBackup, FullBackup]) -> str:
    """Render a backup as 2-space indented JSON with camelCase keys."""
    return backup.model_dump_json(indent=2, by_alias=True)


def generate_backup_filename(
    backup: Union[ProjectBackup, FullBackup], on: Optional[date] = None
) -> str:
    """
    Filename for a backup document.

    The date is the UTC calendar date of ``metadata.exportedAt`` unless
    ``on`` is given.

    Examples:
        >>> generate_backup_filename(project_backup)  # "Test Novel"
        'writr-test-novel-2024-03-01.json'
        >>> generate_backup_filename(full_backup)
        'writr-full-backup-2024-03-01.json'
    """
    if on is None:
        on = datetime.fromisoformat(
            backup.metadata.exported_at.replace("Z", "+00:00")
        ).date()
    stamp = on.isoformat()

    if backup.metadata.type == "full":
        return f"{APP_NAME}-full-backup-{stamp}.json"
    return f"{APP_NAME}-{slugify(backup.data.project.title)}-{stamp}.json"


class BackupExporter:
    """
    Read-side half of the backup engine.

    Attributes:
        db: Store to read from
        logger: Optional logger for operation tracking
        clock: Callable returning the current UTC datetime
    """

    def __init__(
        self,
        db: WritrDB,
        logger: Optional[WritrLogger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.db = db
        self.logger = logger if logger is not None else db.logger
        self.clock = clock or now_utc

    def _now(self) -> str:
        return now_iso(self.clock())

    def gather_project_data(self, project_id: str) -> Optional[ProjectGraph]:
        """Gather one project's graph, or None if it does not exist."""
        with self.db.session_scope() as session:
            return gather_project_graph(self.db.collections(session), project_id)

    @log_database_operation("export_project")
    def export_project(self, project_id: str) -> Optional[ProjectBackup]:
        """
        Wrap one project in a project backup envelope.

        Returns:
            ProjectBackup, or None if the project does not exist
        """
        graph = self.gather_project_data(project_id)
        if graph is None:
            safe_logger(self.logger).log_warning(
                "Project not found for export", {"project_id": project_id}
            )
            return None

        return ProjectBackup(
            metadata=ProjectBackupMetadata(
                version=BACKUP_VERSION,
                exported_at=self._now(),
                project_title=graph.project.title,
            ),
            data=graph,
        )

    @log_database_operation("export_full_backup")
    def export_full_backup(self) -> FullBackup:
        """Wrap every project plus the singleton rows in a full backup envelope."""
        with self.db.session_scope() as session:
            collections = self.db.collections(session)
            graphs = gather_all_project_graphs(collections)
            app_settings = collections.app_settings.get(APP_SETTINGS_ID)
            app_dictionary = collections.app_dictionary.get(APP_DICTIONARY_ID)

        return FullBackup(
            metadata=FullBackupMetadata(
                version=BACKUP_VERSION,
                exported_at=self._now(),
                project_count=len(graphs),
            ),
            app_settings=app_settings,
            app_dictionary=app_dictionary,
            projects=graphs,
        )

    def _write(
        self,
        backup: Union[ProjectBackup, FullBackup],
        output_dir: Optional[Union[str, Path]],
    ) -> Path:
        target_dir = Path(output_dir or EXPORT_DIR).expanduser()
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            path = target_dir / generate_backup_filename(backup)
            path.write_text(serialize_backup(backup), encoding="utf-8")
        except OSError as e:
            raise ExportError(f"Cannot write backup to {target_dir}: {e}") from e

        stamp_last_exported_at(self.db, backup.metadata.exported_at)
        safe_logger(self.logger).log_info(
            "Backup written", {"path": str(path), "type": backup.metadata.type}
        )
        return path

    def download_project_backup(
        self, project_id: str, output_dir: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Export one project and write it to ``output_dir``.

        Raises:
            ExportError: If the project does not exist or the file cannot
                be written
        """
        backup = self.export_project(project_id)
        if backup is None:
            raise ExportError("Project not found")
        return self._write(backup, output_dir)

    def download_full_backup(
        self, output_dir: Optional[Union[str, Path]] = None
    ) -> Path:
        """Export the whole store and write it to ``output_dir``."""
        return self._write(self.export_full_backup(), output_dir)
