#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the writr local store.

Provides the WritrDB class, which owns the SQLite engine and session
factory and hands out per-session collection managers.

Key Features:
    - Schema creation on first use
    - Transaction scope with automatic rollback (the multi-collection
      transaction primitive the backup engine relies on)
    - Per-session CollectionSet for CRUD and project-range reads
    - Optional rotating-file logging

Usage:
    db = WritrDB("~/writr/data/writr.db", log_dir="~/writr/logs")

    with db.session_scope() as session:
        collections = db.collections(session)
        project = collections.projects.get(project_id)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from writr.core.exceptions import DatabaseError
from writr.core.logging_manager import WritrLogger, safe_logger
from .collections import CollectionSet
from .managers import counts_by_collection
from .models import Base


class WritrDB:
    """
    Main database manager for the writr store.

    Attributes:
        db_path: Filesystem path to the SQLite database file
        logger: WritrLogger for the 'database' component, or None
        engine: SQLAlchemy engine instance
        SessionLocal: SQLAlchemy session factory
    """

    def __init__(
        self,
        db_path: Union[str, Path],
        log_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        """
        Initialize database engine, session factory and schema.

        Args:
            db_path: Path to the SQLite file (created if missing)
            log_dir: Directory for log files (optional)
        """
        self.db_path = Path(db_path).expanduser().resolve()

        if log_dir:
            self.log_dir: Optional[Path] = Path(log_dir).expanduser().resolve()
            self.logger: Optional[WritrLogger] = WritrLogger(
                self.log_dir, component_name="database"
            )
        else:
            self.log_dir = None
            self.logger = None

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine, session factory and tables."""
        logger = safe_logger(self.logger)
        try:
            logger.log_operation("database_init_start", {"db_path": str(self.db_path)})

            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.engine: Engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                pool_pre_ping=True,
            )
            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )
            Base.metadata.create_all(self.engine)

            logger.log_operation("database_init_complete", {"success": True})

        except Exception as e:
            logger.log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around a series of operations.

        Everything done with the yielded session is committed together when
        the block exits normally, and rolled back together when any
        exception escapes it. The exception is re-raised.

        Usage:
            with db.session_scope() as session:
                collections = db.collections(session)
                collections.chapters.bulk_add(chapters)
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        logger = safe_logger(self.logger)
        logger.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            logger.log_debug("session_commit", {"session_id": session_id})
        except Exception as e:
            session.rollback()
            logger.log_error(e, {"operation": "session_rollback", "session_id": session_id})
            raise
        finally:
            session.close()
            logger.log_debug("session_close", {"session_id": session_id})

    def get_session(self) -> Session:
        """Create and return a new SQLAlchemy session."""
        return self.SessionLocal()

    def collections(self, session: Session) -> CollectionSet:
        """Collection managers bound to the given session."""
        return CollectionSet(session, self.logger)

    def collection_counts(self) -> Dict[str, int]:
        """Row count of every collection, read in a fresh session."""
        with self.session_scope() as session:
            return counts_by_collection(self.collections(session))

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    # ----- Context Manager Support -----
    def __enter__(self) -> "WritrDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        del exc_type, exc_val, exc_tb
        self.dispose()
