"""
Configuration for textformats document formats.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TEXTFORMATS_CONFIG"

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def str_to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    lowered = str(value).strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected true/false, got '{value}'")


@dataclass
class FormatOptions:
    """Boolean options understood by the CoNLL format."""
    join_category_to_pos: bool = False  # Fold CPOSTAG into POSTAG as "CAT++TAG"
    add_pos_as_attribute: bool = False  # Mirror POSTAG into a trailing fPOS attribute

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "FormatOptions":
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.debug("Ignoring unknown format option '%s'", key)
                continue
            if value is None:
                continue
            values[key] = str_to_bool(value)
        return cls(**values)

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)


def get_config_file() -> Path:
    """Get the path to the textformats configuration file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".textformats" / "config.json"


def read_config(path: Optional[Path] = None) -> dict:
    """
    Read the textformats configuration file.

    Returns:
        Dictionary with configuration values (empty dict if file doesn't exist)
    """
    config_file = Path(path) if path is not None else get_config_file()
    if not config_file.exists():
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config file %s: %s", config_file, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a JSON object", config_file)
        return {}
    return data


def load_options(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    config_path: Optional[Path] = None,
) -> FormatOptions:
    """Merge config-file values with explicit overrides (overrides win, None is ignored)."""
    merged: Dict[str, Any] = dict(read_config(config_path))
    if overrides:
        for key, value in overrides.items():
            if value is not None:
                merged[key] = value
    return FormatOptions.from_dict(merged)
