"""
Project errors — the fatal conditions raised while resolving a project.

Every error carries a human-readable message and a stable ``kind``
string so callers (CLI, JSON output) can branch without parsing text.
Advisory conditions never raise; they are recorded as log entries on
the Project instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class ProjectError(Exception):
    """Base class for all project resolution failures."""

    kind = "bolt/project-error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        # Entries accumulated before the failure, when the raiser had them
        self.logs: list = []

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message, "details": self.details}


class ProjectNotFoundError(ProjectError):
    """An explicitly requested project directory does not exist."""

    kind = "bolt/project-error"

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Could not find project at {path}", {"path": str(path)})
        self.path = Path(path)


class WorldWritableError(ProjectError):
    """The project directory can be written by any user."""

    kind = "bolt/world-writable-error"

    def __init__(self, path: Path | str) -> None:
        super().__init__(
            f"Project directory '{path}' is world-writable which poses a security risk. "
            f"Set BOLT_PROJECT='{path}' to force the use of this project directory.",
            {"path": str(path)},
        )
        self.path = Path(path)


class FileError(ProjectError):
    """A settings file exists but cannot be read."""

    kind = "bolt/file-error"


class SettingsParseError(ProjectError):
    """A settings file is not valid YAML or is not a mapping."""

    kind = "bolt/parse-error"


class ValidationError(ProjectError):
    """Structural problem in bolt-project.yaml."""

    kind = "bolt/validation-error"


class InvalidNameError(ValidationError):
    kind = "bolt/invalid-project-name"


class NameCollisionError(ValidationError):
    kind = "bolt/project-name-collision"


class WrongTypeError(ValidationError):
    kind = "bolt/invalid-setting-type"


class ModuleDeclarationError(ValidationError):
    kind = "bolt/invalid-module-declaration"
