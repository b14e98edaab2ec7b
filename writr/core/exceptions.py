#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Writr project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in different subsystems.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Base for all database-related errors
    │   ├── StorageError - Transaction or driver failures
    │   ├── BackupError - Backup restoration failures
    │   │   └── ReferentialIntegrityError - Unresolvable strict reference
    │   └── ExportError - Backup export failures
    └── ValidationError - Data validation failures
        └── BackupValidationError - Base for backup document rejections
            ├── InvalidFormatError - Input is not a decodable document
            ├── InvalidSchemaError - Document has the wrong structure
            └── UnsupportedVersionError - Document is newer than supported

Usage:
    from writr.core.exceptions import BackupValidationError, DatabaseError

    try:
        backup = parse_backup_file(text)
    except BackupValidationError as e:
        logger.error(f"Rejected backup: {e}")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Optional, Sequence


class DatabaseError(Exception):
    """
    Base exception for database-related errors.

    Raised when database operations fail due to connection issues,
    query errors, integrity violations, or other database problems.

    This is the parent class for all database-specific exceptions.
    Catch this to handle any database error, or catch specific
    subclasses for more granular error handling.

    Examples:
        >>> raise DatabaseError("Connection to database failed")

    See Also:
        StorageError, BackupError, ExportError
    """

    pass


class StorageError(DatabaseError):
    """
    Exception for failures reported by the storage engine itself.

    Raised when a transaction cannot be completed: constraint violations,
    locked database files, broken connections. Any writes made inside the
    failing transaction have been rolled back by the time this is seen.

    Examples:
        >>> raise StorageError("Data integrity violation: UNIQUE constraint failed")
    """

    pass


class BackupError(DatabaseError):
    """
    Exception for backup restoration failures.

    Raised when a validated backup cannot be applied to the store, e.g.
    because its project graph is internally inconsistent.

    Examples:
        >>> raise BackupError("Cannot import backup: project graph is empty")
    """

    pass


class ReferentialIntegrityError(BackupError):
    """
    Exception for strict references that do not resolve inside their graph.

    Raised while regenerating identifiers for a duplicated project when a
    required foreign key (relationship endpoint, grid cell row/column,
    chapter of a session/comment/snapshot) points at an entity that is not
    part of the gathered graph. This indicates a corrupted source graph.

    Attributes:
        reference: The identifier that could not be resolved
        field: Name of the field holding the reference, when known

    Examples:
        >>> raise ReferentialIntegrityError("abc", field="chapter_id")
    """

    def __init__(self, reference: str, field: Optional[str] = None) -> None:
        self.reference = reference
        self.field = field
        where = f" (field '{field}')" if field else ""
        super().__init__(f"ID mapping not found for: {reference}{where}")


class ExportError(DatabaseError):
    """
    Exception for backup export failures.

    Raised when export operations fail, including:
    - Requested project does not exist
    - Output directory is not writable
    - Serialization errors

    Examples:
        >>> raise ExportError("Project not found")
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks before it reaches
    the database or the backup engine.

    Examples:
        >>> raise ValidationError("Invalid identifier: 'not-a-uuid'")
    """

    pass


class BackupValidationError(ValidationError):
    """
    Base exception for rejected backup documents.

    Catch this to handle every way an untrusted backup can be refused
    before anything is written to the store.
    """

    pass


class InvalidFormatError(BackupValidationError):
    """
    Exception for input that cannot be decoded at all.

    Examples:
        >>> raise InvalidFormatError("Invalid JSON: Unable to parse backup file")
    """

    pass


class InvalidSchemaError(BackupValidationError):
    """
    Exception for documents whose structure does not match either backup shape.

    Attributes:
        issues: Field-level messages, one per structural problem, in the
            form "<dotted.path>: <message>"

    Examples:
        >>> err = InvalidSchemaError(["metadata.version: Input should be greater than 0"])
        >>> err.issues
        ['metadata.version: Input should be greater than 0']
    """

    def __init__(self, issues: Sequence[str]) -> None:
        self.issues: List[str] = list(issues)
        super().__init__(f"Invalid backup format: {', '.join(self.issues)}")


class UnsupportedVersionError(BackupValidationError):
    """
    Exception for documents written by a newer format version.

    Attributes:
        version: The version declared by the document

    Examples:
        >>> raise UnsupportedVersionError(2)
    """

    def __init__(self, version: int) -> None:
        self.version = version
        super().__init__(
            f"Unsupported backup version: {version}. Please update the application."
        )
