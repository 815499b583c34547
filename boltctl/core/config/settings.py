"""
Settings loader — reads an optional YAML mapping from disk.

A missing file is not an error: it yields an empty mapping, which is
how projects without a bolt-project.yaml are represented.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from boltctl.core.config.errors import FileError, SettingsParseError

logger = logging.getLogger(__name__)


def read_optional_yaml_mapping(path: Path, label: str = "project") -> dict[Any, Any]:
    """Load a YAML mapping, or ``{}`` if the file does not exist.

    Args:
        path: File to read.
        label: Human name of the file's role, used in error messages.

    Raises:
        FileError: The file exists but cannot be read.
        SettingsParseError: The content is not valid YAML or not a mapping.
    """
    if not path.exists():
        logger.debug("No %s file at %s", label, path)
        return {}

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileError(f"Could not read {label} file at {path}: {e}", {"path": str(path)}) from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise SettingsParseError(
            f"Error parsing {label} file at {path}: {e}", {"path": str(path)}
        ) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SettingsParseError(
            f"Invalid content for {label} file at {path}: "
            f"expected a mapping, got {type(data).__name__}",
            {"path": str(path)},
        )

    return data
