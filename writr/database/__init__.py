"""
writr.database
--------------
SQLite-backed store: ORM models, record schemas, collection managers and
the WritrDB transaction owner.
"""
from .collections import CollectionSet
from .manager import WritrDB

__all__ = ["CollectionSet", "WritrDB"]
