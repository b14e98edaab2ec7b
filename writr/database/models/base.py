"""
Base Classes and Mixins
------------------------

Foundational ORM classes for the writr store.

Classes:
    - Base: Declarative base for all SQLAlchemy models
    - TimestampMixin: created_at / updated_at columns
    - ProjectScopedMixin: indexed project_id column

Identifiers are UUID text supplied by the caller, never generated by the
database. Timestamps are kept as the ISO text carried by the record so an
export reproduces exactly what was imported. Cross-entity references are
plain indexed columns: optional links may dangle or form cycles, so no
database-level foreign keys are declared.
"""
# --- Annotations ---
from __future__ import annotations

# --- Third party ---
from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Provides the metadata object used by WritrDB to create the schema.
    """

    pass


class TimestampMixin:
    """ISO-8601 creation and modification timestamps."""

    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)


class ProjectScopedMixin:
    """Owning project reference, indexed for project-range queries."""

    project_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
