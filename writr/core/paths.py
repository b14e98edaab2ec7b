#!/usr/bin/env python3
"""
paths.py
-------------------
Default filesystem locations for writr.

    ROOT/
    ├── writr/         # Package source
    ├── data/          # Local store (writr.db)
    ├── exports/       # Backup documents written by the exporter
    └── logs/          # Application logs

Every location can be overridden through constructor arguments or CLI
options; these are only the defaults.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/writr/core/paths.py.

    Raises:
        RuntimeError: If the package directory cannot be found under ROOT
    """
    current_file = Path(__file__).resolve()
    root = current_file.parent.parent.parent

    if not (root / "writr").is_dir():
        raise RuntimeError(
            f"Cannot determine valid project root. "
            f"Expected {root / 'writr'} to exist. "
            f"Current file: {current_file}"
        )

    return root


# ----- Project directory -----
ROOT: Path = _get_project_root()

# --- Store ---
DATA_DIR = ROOT / "data"
DB_PATH = DATA_DIR / "writr.db"

# --- Backups ---
EXPORT_DIR = ROOT / "exports"

# --- Logs ---
LOG_DIR = ROOT / "logs"
