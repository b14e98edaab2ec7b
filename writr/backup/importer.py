#!/usr/bin/env python3
"""
importer.py
--------------------
Apply a validated backup to the store.

Each project in the backup goes through one conflict decision:

    absent locally             -> insert as-is             (imported)
    present, SKIP              -> no writes                (skipped)
    present, REPLACE           -> erase local rows, insert (imported, replaced)
    present, DUPLICATE         -> remap ids, insert copy   (imported)

For a full backup with ``restore_settings`` the app settings and app
dictionary are then overwritten.

All of it runs in a single transaction: one failure anywhere rolls back
every project already written in the same call. `import_backup()` never
raises; failures come back as ``ImportResult(success=False, errors=[...])``.

Usage:
    backup = parse_backup_file(text)
    result = BackupImporter(db).import_backup(
        backup, ImportOptions(ConflictResolution.DUPLICATE)
    )
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Optional, Union

# --- Local imports ---
from writr.core.logging_manager import WritrLogger, safe_logger
from writr.database.collections import CollectionSet
from writr.database.decorators import log_database_operation
from writr.database.manager import WritrDB
from .remap import IdFactory, remap_project_ids
from .settings import restore_singletons
from .types import (
    ConflictResolution,
    FullBackup,
    ImportOptions,
    ImportOutcome,
    ImportResult,
    ProjectBackup,
    ProjectGraph,
)
from .validation import is_full_backup


def insert_project_graph(collections: CollectionSet, graph: ProjectGraph) -> int:
    """
    Insert every record of a graph, project first.

    Returns:
        Number of rows inserted

    Raises:
        StorageError: If any identifier already exists
    """
    collections.projects.add(graph.project)
    inserted = 1
    for name, records in graph.iter_collections():
        inserted += collections[name].bulk_add(records)
    if graph.project_dictionary is not None:
        collections.project_dictionaries.add(graph.project_dictionary)
        inserted += 1
    return inserted


class BackupImporter:
    """
    Write-side half of the backup engine.

    Attributes:
        db: Store to write to
        logger: Optional logger for operation tracking
        id_factory: Identifier source used when duplicating projects
    """

    def __init__(
        self,
        db: WritrDB,
        logger: Optional[WritrLogger] = None,
        id_factory: Optional[IdFactory] = None,
    ) -> None:
        self.db = db
        self.logger = logger if logger is not None else db.logger
        self.id_factory = id_factory

    def _import_single_project(
        self,
        collections: CollectionSet,
        graph: ProjectGraph,
        resolution: ConflictResolution,
    ) -> ImportOutcome:
        project_id = graph.project.id
        logger = safe_logger(self.logger)

        if not collections.projects.exists(project_id):
            insert_project_graph(collections, graph)
            return ImportOutcome.IMPORTED

        if resolution is ConflictResolution.SKIP:
            logger.log_info("Project exists, skipping", {"project_id": project_id})
            return ImportOutcome.SKIPPED

        if resolution is ConflictResolution.REPLACE:
            collections.delete_all_project_data(project_id)
            insert_project_graph(collections, graph)
            logger.log_info("Project replaced", {"project_id": project_id})
            return ImportOutcome.REPLACED

        copy = remap_project_ids(graph, self.id_factory)
        insert_project_graph(collections, copy)
        logger.log_info(
            "Project duplicated",
            {"project_id": project_id, "copy_id": copy.project.id},
        )
        return ImportOutcome.IMPORTED

    @log_database_operation("import_backup")
    def import_backup(
        self,
        backup: Union[ProjectBackup, FullBackup],
        options: Optional[ImportOptions] = None,
    ) -> ImportResult:
        """
        Import every project of a backup, atomically.

        Args:
            backup: Envelope returned by parse_backup_file/validate_backup
            options: Conflict policy and settings flag (default: skip, no
                settings)

        Returns:
            ImportResult; ``success`` is False if anything failed, in which
            case nothing was written
        """
        options = options or ImportOptions()
        result = ImportResult()
        graphs: List[ProjectGraph] = (
            list(backup.projects) if is_full_backup(backup) else [backup.data]
        )

        try:
            with self.db.session_scope() as session:
                collections = self.db.collections(session)

                for graph in graphs:
                    result.record(
                        self._import_single_project(
                            collections, graph, options.conflict_resolution
                        )
                    )

                if options.restore_settings and is_full_backup(backup):
                    result.settings_restored = restore_singletons(
                        collections, backup.app_settings, backup.app_dictionary
                    )

            result.success = True

        except Exception as e:
            safe_logger(self.logger).log_error(
                e,
                {
                    "operation": "import_backup",
                    "backup_type": backup.metadata.type,
                    "projects_in_backup": len(graphs),
                },
            )
            result.success = False
            result.errors.append(str(e) or type(e).__name__)

        safe_logger(self.logger).log_operation("import_backup_result", result.to_dict())
        return result
