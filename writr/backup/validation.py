#!/usr/bin/env python3
"""
validation.py
--------------------
Schema and version gate for untrusted backup documents.

Nothing read from disk reaches the importer without passing through
`parse_backup_file()` (text) or `validate_backup()` (already-decoded
JSON), which either return a fully typed ProjectBackup / FullBackup or
raise one of the BackupValidationError subclasses.

Version policy: any version up to BACKUP_VERSION is accepted; anything
newer is refused, since it may carry fields this release cannot
interpret safely.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from typing import Any, List, Union

# --- Third party ---
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

# --- Local imports ---
from writr.core.exceptions import (
    InvalidFormatError,
    InvalidSchemaError,
    UnsupportedVersionError,
)
from .types import BACKUP_VERSION, Backup, FullBackup, ProjectBackup

_backup_adapter: TypeAdapter = TypeAdapter(Backup)


def is_backup_version_supported(version: int) -> bool:
    """True for the current format version and every older one."""
    return version <= BACKUP_VERSION


def is_full_backup(backup: Union[ProjectBackup, FullBackup]) -> bool:
    return backup.metadata.type == "full"


def is_project_backup(backup: Union[ProjectBackup, FullBackup]) -> bool:
    return backup.metadata.type == "project"


def _format_issues(error: PydanticValidationError) -> List[str]:
    issues = []
    for issue in error.errors():
        path = ".".join(str(part) for part in issue["loc"])
        issues.append(f"{path}: {issue['msg']}" if path else issue["msg"])
    return issues


def _declared_version(raw: Any) -> Any:
    if isinstance(raw, dict) and isinstance(raw.get("metadata"), dict):
        return raw["metadata"].get("version")
    return None


def validate_backup(raw: Any) -> Union[ProjectBackup, FullBackup]:
    """
    Validate a decoded JSON value against both backup shapes.

    Args:
        raw: Result of decoding a backup document

    Returns:
        The typed envelope selected by metadata.type

    Raises:
        InvalidSchemaError: If raw matches neither shape; ``issues`` lists
            every offending field path
    """
    try:
        return _backup_adapter.validate_python(raw)
    except PydanticValidationError as e:
        raise InvalidSchemaError(_format_issues(e)) from e


def parse_backup_file(content: Union[str, bytes]) -> Union[ProjectBackup, FullBackup]:
    """
    Decode, version-check and validate a backup document.

    The version gate runs before structural validation when the document
    declares an integer version, so a newer document is reported as
    unsupported instead of structurally invalid.

    Args:
        content: Document text (or UTF-8 bytes)

    Returns:
        Typed ProjectBackup or FullBackup

    Raises:
        InvalidFormatError: If content is not valid JSON
        UnsupportedVersionError: If the document is newer than BACKUP_VERSION
        InvalidSchemaError: If the document has the wrong structure
    """
    try:
        raw = json.loads(content)
    except (ValueError, TypeError) as e:
        raise InvalidFormatError("Invalid JSON: Unable to parse backup file") from e

    version = _declared_version(raw)
    if (
        isinstance(version, int)
        and not isinstance(version, bool)
        and not is_backup_version_supported(version)
    ):
        raise UnsupportedVersionError(version)

    backup = validate_backup(raw)

    if not is_backup_version_supported(backup.metadata.version):
        raise UnsupportedVersionError(backup.metadata.version)

    return backup
