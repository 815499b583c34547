"""
Project construction — turns loaded settings into a Project.

Only stats files that may or may not exist; all reading happens in the
loader before this point.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from boltctl.core.config.errors import ValidationError
from boltctl.core.config.options import (
    BOLT_OPTIONS,
    INVENTORY_OPTIONS,
    LEGACY_CONFIG_FILE,
    OBSOLETE_PROJECT_FILE,
    PROJECT_FILE,
)
from boltctl.core.config.validator import validate
from boltctl.core.models.project import Deprecation, LogEntry, Project, ProjectKind

logger = logging.getLogger(__name__)


def build_project(
    raw_settings: dict[Any, Any],
    path: Path | str,
    kind: ProjectKind = ProjectKind.OPTION,
    logs: list[LogEntry] | None = None,
    builtin_modules: Iterable[str] | None = None,
) -> Project:
    """Construct a Project from settings already read from ``path``.

    Transport keys are stripped from the settings with a warning, the
    canonical config file is chosen, and the settings are validated
    when a bolt-project.yaml is present.

    Args:
        raw_settings: Mapping loaded from bolt-project.yaml (may be empty).
        path: Project root.
        kind: How the project was discovered.
        logs: Entries accumulated so far; the project continues this list.
        builtin_modules: Reserved module names for validation.

    Raises:
        ValidationError: If bolt-project.yaml settings are malformed. The
            entries logged up to that point are attached as ``logs``.
    """
    root = Path(path).expanduser().resolve()
    logs = list(logs) if logs is not None else []
    deprecations: list[Deprecation] = []

    project_file = root / PROJECT_FILE
    legacy_file = root / LEGACY_CONFIG_FILE
    has_project_file = project_file.is_file()
    has_legacy_file = legacy_file.is_file()

    if has_legacy_file and has_project_file:
        deprecations.append(Deprecation(
            type=f"Using {LEGACY_CONFIG_FILE} for project configuration",
            message=(
                f"Project-level configuration in {LEGACY_CONFIG_FILE} is deprecated if using "
                f"{PROJECT_FILE}. Transport config should be set in inventory.yaml, all other "
                f"config should be set in {PROJECT_FILE}."
            ),
        ))

    transport_keys = [k for k in raw_settings if k in INVENTORY_OPTIONS]
    if transport_keys:
        logs.append(LogEntry(
            level="warn",
            message=(
                f"Transport configuration isn't supported in {PROJECT_FILE}. "
                f"Ignoring keys {transport_keys}"
            ),
        ))
    settings = {k: v for k, v in raw_settings.items() if k not in INVENTORY_OPTIONS}

    if any(k in BOLT_OPTIONS for k in settings):
        if has_legacy_file:
            logs.append(LogEntry(
                level="warn",
                message=f"{PROJECT_FILE} contains valid config keys, {LEGACY_CONFIG_FILE} will be ignored",
            ))
        config_file = project_file
    else:
        config_file = legacy_file

    project = Project(
        path=root,
        kind=kind,
        settings=settings,
        config_file=config_file,
        logs=logs,
        deprecations=deprecations,
    )
    logger.debug("Built %s project at %s (config file: %s)", kind.value, root, config_file.name)

    if has_project_file:
        try:
            validate(project, builtin_modules=builtin_modules)
        except ValidationError as e:
            e.logs = list(project.logs)
            raise

    return project


def check_deprecated_file(project: Project) -> Deprecation | None:
    """Record a deprecation if the obsolete project.yaml is present."""
    if not (project.path / OBSOLETE_PROJECT_FILE).is_file():
        return None

    deprecation = Deprecation(
        type=f"Using {OBSOLETE_PROJECT_FILE} instead of {PROJECT_FILE}",
        message=(
            f"Project configuration file '{OBSOLETE_PROJECT_FILE}' is deprecated; "
            f"use '{PROJECT_FILE}' instead."
        ),
    )
    project.deprecations.append(deprecation)
    return deprecation
