#!/usr/bin/env python3
"""
settings.py
--------------------
Access to the process-wide singleton rows (app settings, app dictionary)
on behalf of the backup engine.

Restoration is an unconditional overwrite, never a merge.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional

# --- Local imports ---
from writr.database.collections import CollectionSet
from writr.database.manager import WritrDB
from writr.database.schemas import (
    APP_SETTINGS_ID,
    AppDictionaryRecord,
    AppSettingsRecord,
)


def load_app_settings(collections: CollectionSet, now: str) -> AppSettingsRecord:
    """Stored settings, or defaults stamped with ``now`` when none exist."""
    stored = collections.app_settings.get(APP_SETTINGS_ID)
    if stored is not None:
        return stored
    return AppSettingsRecord(updated_at=now)


def stamp_last_exported_at(db: WritrDB, when: str) -> AppSettingsRecord:
    """
    Record that a backup was just written.

    Creates the settings row from defaults if it does not exist yet.

    Args:
        db: Store to update
        when: ISO timestamp of the export

    Returns:
        The settings as stored after the update
    """
    with db.session_scope() as session:
        collections = db.collections(session)
        updated = load_app_settings(collections, when).model_copy(
            update={"last_exported_at": when, "updated_at": when}
        )
        collections.app_settings.put(updated)
    return updated


def restore_singletons(
    collections: CollectionSet,
    app_settings: Optional[AppSettingsRecord],
    app_dictionary: Optional[AppDictionaryRecord],
) -> bool:
    """
    Overwrite the singleton rows with those carried by a full backup.

    Returns:
        True if the settings row was written
    """
    if app_dictionary is not None:
        collections.app_dictionary.put(app_dictionary)
    if app_settings is None:
        return False
    collections.app_settings.put(app_settings)
    return True
