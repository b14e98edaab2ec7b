"""
writr.backup
------------
Backup and restore engine: validate untrusted documents, gather and export
project graphs, re-key graphs for duplication, and import atomically under
a conflict policy.

Entry points:
    BackupExporter(db).export_project(project_id)
    BackupExporter(db).export_full_backup()
    BackupExporter(db).download_project_backup(project_id, output_dir)
    BackupExporter(db).download_full_backup(output_dir)
    parse_backup_file(text)
    BackupImporter(db).import_backup(backup, ImportOptions(...))
"""
from .exporter import BackupExporter, generate_backup_filename, serialize_backup
from .importer import BackupImporter
from .remap import remap_project_ids
from .types import (
    BACKUP_VERSION,
    Backup,
    ConflictResolution,
    FullBackup,
    ImportOptions,
    ImportResult,
    ProjectBackup,
    ProjectGraph,
)
from .validation import (
    is_backup_version_supported,
    is_full_backup,
    is_project_backup,
    parse_backup_file,
    validate_backup,
)

__all__ = [
    "BACKUP_VERSION",
    "Backup",
    "BackupExporter",
    "BackupImporter",
    "ConflictResolution",
    "FullBackup",
    "ImportOptions",
    "ImportResult",
    "ProjectBackup",
    "ProjectGraph",
    "generate_backup_filename",
    "is_backup_version_supported",
    "is_full_backup",
    "is_project_backup",
    "parse_backup_file",
    "remap_project_ids",
    "serialize_backup",
    "validate_backup",
]
