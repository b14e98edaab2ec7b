#!/usr/bin/env python3
"""
collection_manager.py
---------------------
Config-driven manager for one record collection.

Every collection in the store behaves the same way: rows keyed by a string
identifier, most of them scoped to a project. A CollectionConfig names the
ORM model, the record schema and (for the odd singleton) custom row
conversion; CollectionManager supplies the CRUD and project-range
operations on top of it.

Records cross this boundary as validated pydantic records, never as ORM
rows, so callers cannot accidentally hold on to session state.

Usage:
    with db.session_scope() as session:
        chapters = db.collections(session).chapters
        chapters.bulk_add(records)
        chapters.where_project(project_id)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Type

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from writr.core.exceptions import DatabaseError
from writr.core.logging_manager import WritrLogger, safe_logger
from writr.database.decorators import handle_db_errors
from writr.database.schemas import Record
from .base_manager import BaseManager


@dataclass(frozen=True)
class CollectionConfig:
    """
    Configuration for a single collection.

    Attributes:
        name: Collection name (also the table name), e.g. 'chapters'
        model_class: SQLAlchemy model class
        record_class: Pydantic record class returned to callers
        project_scoped: Whether rows carry a project_id to range over
        to_row: Optional record -> ORM row conversion
        from_row: Optional ORM row -> record conversion
    """

    name: str
    model_class: Type
    record_class: Type[Record]
    project_scoped: bool = True
    to_row: Optional[Callable[[Any], Any]] = None
    from_row: Optional[Callable[[Any], Any]] = None


class CollectionManager(BaseManager):
    """Generic CRUD and project-range access for one collection."""

    def __init__(
        self,
        session: Session,
        logger: Optional[WritrLogger],
        config: CollectionConfig,
    ):
        super().__init__(session, logger)
        self.config = config
        self.model = config.model_class

    def __repr__(self) -> str:
        return f"<CollectionManager({self.config.name})>"

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def _to_record(self, row: Any) -> Record:
        if self.config.from_row is not None:
            return self.config.from_row(row)
        values = {
            attr.key: getattr(row, attr.key)
            for attr in self.model.__mapper__.column_attrs
        }
        return self.config.record_class.model_validate(values)

    def _to_row(self, record: Record) -> Any:
        if not isinstance(record, self.config.record_class):
            raise DatabaseError(
                f"{self.config.name} expects {self.config.record_class.__name__}, "
                f"got {type(record).__name__}"
            )
        if self.config.to_row is not None:
            return self.config.to_row(record)
        return self.model(**record.model_dump())

    def _require_project_scope(self) -> None:
        if not self.config.project_scoped:
            raise DatabaseError(f"{self.config.name} is not scoped by project")

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @handle_db_errors
    def get(self, record_id: str) -> Optional[Record]:
        """Fetch one record by identifier, or None."""
        row = self.session.get(self.model, record_id)
        return self._to_record(row) if row is not None else None

    @handle_db_errors
    def exists(self, record_id: str) -> bool:
        return self.session.get(self.model, record_id) is not None

    @handle_db_errors
    def list_all(self) -> List[Record]:
        rows = self.session.scalars(select(self.model)).all()
        return [self._to_record(row) for row in rows]

    @handle_db_errors
    def where_project(self, project_id: str) -> List[Record]:
        """
        Every record whose project_id equals the given identifier.

        Raises:
            DatabaseError: If the collection is not project scoped
        """
        self._require_project_scope()
        rows = self.session.scalars(
            select(self.model).where(self.model.project_id == project_id)
        ).all()
        return [self._to_record(row) for row in rows]

    @handle_db_errors
    def first_where_project(self, project_id: str) -> Optional[Record]:
        self._require_project_scope()
        row = self.session.scalars(
            select(self.model).where(self.model.project_id == project_id).limit(1)
        ).first()
        return self._to_record(row) if row is not None else None

    @handle_db_errors
    def count(self) -> int:
        return self.session.scalar(select(func.count()).select_from(self.model)) or 0

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @handle_db_errors
    def add(self, record: Record) -> None:
        """
        Insert a new record.

        Raises:
            StorageError: If a row with the same identifier already exists
        """
        row = self._to_row(record)

        def _do_add():
            self.session.add(row)
            self.session.flush()

        self._execute_with_retry(_do_add)

    @handle_db_errors
    def bulk_add(self, records: Iterable[Record]) -> int:
        """
        Insert many new records in one flush.

        Returns:
            Number of records inserted

        Raises:
            StorageError: If any identifier already exists
        """
        rows = [self._to_row(record) for record in records]
        if not rows:
            return 0

        def _do_bulk_add():
            self.session.add_all(rows)
            self.session.flush()

        self._execute_with_retry(_do_bulk_add)
        safe_logger(self.logger).log_debug(
            f"Inserted {len(rows)} {self.config.name}"
        )
        return len(rows)

    @handle_db_errors
    def put(self, record: Record) -> None:
        """Insert the record, or overwrite every field of the existing row."""
        row = self._to_row(record)

        def _do_put():
            self.session.merge(row)
            self.session.flush()

        self._execute_with_retry(_do_put)

    @handle_db_errors
    def delete(self, record_id: str) -> bool:
        """
        Delete one record by identifier.

        Returns:
            True if a row was deleted, False if none existed
        """
        row = self.session.get(self.model, record_id)
        if row is None:
            return False
        self.session.delete(row)
        self.session.flush()
        return True

    @handle_db_errors
    def delete_where_project(self, project_id: str) -> int:
        """
        Delete every record scoped to a project.

        Returns:
            Number of rows deleted
        """
        self._require_project_scope()
        result = self.session.execute(
            delete(self.model).where(self.model.project_id == project_id)
        )
        return result.rowcount or 0


def counts_by_collection(managers: Iterable[CollectionManager]) -> Dict[str, int]:
    """Row count for each of the given collections, keyed by name."""
    return {manager.config.name: manager.count() for manager in managers}
