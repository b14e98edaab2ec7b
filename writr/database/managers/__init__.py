"""
Collection managers for the writr store.
"""
from .base_manager import BaseManager
from .collection_manager import CollectionConfig, CollectionManager, counts_by_collection

__all__ = [
    "BaseManager",
    "CollectionConfig",
    "CollectionManager",
    "counts_by_collection",
]
