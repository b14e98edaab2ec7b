#!/usr/bin/env python3
"""
config.py
-------------------
Optional YAML configuration for writr.

A config file may set any of the store, log and export locations; keys it
omits fall back to the defaults in writr.core.paths. Relative paths are
resolved against the directory holding the config file.

Example writr.yaml:
    db_path: data/writr.db
    log_dir: logs
    export_dir: ~/Backups/writr
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from writr.core.exceptions import ValidationError
from writr.core.paths import DB_PATH, EXPORT_DIR, LOG_DIR, ROOT

CONFIG_FILENAME = "writr.yaml"
_KNOWN_KEYS = ("db_path", "log_dir", "export_dir")


@dataclass
class WritrConfig:
    """Resolved filesystem locations."""

    db_path: Path = DB_PATH
    log_dir: Path = LOG_DIR
    export_dir: Path = EXPORT_DIR

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> "WritrConfig":
        """
        Build a config from a YAML file.

        Args:
            config_path: File to read. When None, ROOT/writr.yaml is used
                if it exists, otherwise the defaults are returned.

        Returns:
            WritrConfig with file values applied over the defaults

        Raises:
            ValidationError: If the file is not a YAML mapping, or holds
                unknown keys or non-string values
        """
        if config_path is None:
            candidate = ROOT / CONFIG_FILENAME
            if not candidate.is_file():
                return cls()
            config_path = candidate

        path = Path(config_path).expanduser()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ValidationError(f"Cannot read config {path}: {e}") from e

        return cls.from_dict(data or {}, base_dir=path.parent)

    @classmethod
    def from_dict(cls, data: Any, base_dir: Path = ROOT) -> "WritrConfig":
        if not isinstance(data, dict):
            raise ValidationError("Config must be a mapping of setting -> path")

        unknown = sorted(set(data) - set(_KNOWN_KEYS))
        if unknown:
            raise ValidationError(f"Unknown config keys: {', '.join(unknown)}")

        values: Dict[str, Path] = {}
        for key, value in data.items():
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"Config key '{key}' must be a non-empty path")
            resolved = Path(value).expanduser()
            values[key] = resolved if resolved.is_absolute() else base_dir / resolved

        return cls(**values)
