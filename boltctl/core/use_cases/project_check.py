"""
Project check use case — resolve the project and report issues.

Unlike ``select_project``, this never raises for project errors: every
fatal condition becomes an entry in ``errors`` tagged with its kind.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from boltctl.core.config.errors import ProjectError
from boltctl.core.config.loader import select_project
from boltctl.core.models.project import LogEntry, Project

logger = logging.getLogger(__name__)


@dataclass
class ProjectCheckResult:
    """Result of project resolution and validation."""

    valid: bool = False
    project: Project | None = None
    errors: list[str] = field(default_factory=list)
    error_kinds: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    deprecations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        project = self.project
        return {
            "valid": self.valid,
            "path": str(project.path) if project else None,
            "kind": project.kind.value if project else None,
            "config_file": str(project.config_file) if project else None,
            "name": project.name if project else None,
            "errors": self.errors,
            "error_kinds": self.error_kinds,
            "warnings": self.warnings,
            "deprecations": self.deprecations,
        }


def check_project(
    option: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
    cwd: Path | str | None = None,
    builtin_modules: Iterable[str] | None = None,
) -> ProjectCheckResult:
    """Resolve and validate the project for an invocation.

    Args:
        option: Explicit project directory (``--project``).
        environ: Environment to read BOLT_PROJECT from (default: os.environ).
        cwd: Directory to search upward from (default: current directory).
        builtin_modules: Reserved module names (default: the shipped set).

    Returns:
        ProjectCheckResult with the project (when it resolved) and any issues.
    """
    result = ProjectCheckResult()
    logs: list[LogEntry] = []

    try:
        project = select_project(
            option=option,
            environ=environ,
            cwd=cwd,
            logs=logs,
            builtin_modules=builtin_modules,
        )
    except ProjectError as e:
        logger.debug("Project resolution failed: %s", e.kind)
        result.errors.append(e.message)
        result.error_kinds.append(e.kind)
        # Validation failures carry the entries logged before them
        entries = e.logs or logs
        result.warnings.extend(entry.message for entry in entries if entry.level == "warn")
        return result

    result.project = project
    result.warnings.extend(entry.message for entry in project.logs if entry.level == "warn")
    result.deprecations.extend(dep.message for dep in project.deprecations)

    result.valid = True
    return result
