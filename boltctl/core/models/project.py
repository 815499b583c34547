"""
Project model — the resolved directory and settings for one invocation.

A Project is built once by the loader and then only read. Its identity
is its path: two projects rooted at the same directory are the same
project, whatever settings or discovery kind they carry.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from boltctl.core.config.options import LEGACY_CONFIG_FILE, PROJECT_FILE


class ProjectKind(str, Enum):
    """How a project was discovered."""

    OPTION = "option"
    USER = "user"
    SYSTEM = "system"
    EMBEDDED = "embedded"
    LOCAL = "local"
    ENVIRONMENT = "environment"

    @property
    def creates_directory(self) -> bool:
        return self in _CREATES_DIRECTORY

    @property
    def must_exist(self) -> bool:
        return self in _MUST_EXIST

    @property
    def checks_world_writable(self) -> bool:
        return self not in _TRUSTED_LOCATION

    @property
    def is_default(self) -> bool:
        return self in _DEFAULT_KINDS


# ── Policy tables ───────────────────────────────────────────────

_CREATES_DIRECTORY = frozenset({ProjectKind.USER})
_MUST_EXIST = frozenset({ProjectKind.OPTION})
_TRUSTED_LOCATION = frozenset({ProjectKind.ENVIRONMENT})
_DEFAULT_KINDS = frozenset({ProjectKind.USER, ProjectKind.SYSTEM})

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class LogEntry(BaseModel):
    """A log record produced during resolution, delivered later by the caller."""

    model_config = ConfigDict(frozen=True)

    level: Literal["debug", "info", "warn", "error"]
    message: str

    @property
    def levelno(self) -> int:
        return _LEVELS[self.level]


class Deprecation(BaseModel):
    """A deprecated usage detected in the project."""

    model_config = ConfigDict(frozen=True)

    type: str
    message: str


class Project(BaseModel):
    """A resolved project root with its loaded settings.

    ``logs`` and ``deprecations`` are append-only; everything else is
    fixed at construction.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    kind: ProjectKind = ProjectKind.OPTION
    settings: dict[Any, Any] = Field(default_factory=dict)
    config_file: Path
    logs: list[LogEntry] = Field(default_factory=list)
    deprecations: list[Deprecation] = Field(default_factory=list)

    # ── Identity ────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Project):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __str__(self) -> str:
        return str(self.path)

    # ── Derived paths ───────────────────────────────────────────

    @property
    def project_file(self) -> Path:
        return self.path / PROJECT_FILE

    @property
    def legacy_config_file(self) -> Path:
        return self.path / LEGACY_CONFIG_FILE

    @property
    def inventory_file(self) -> Path:
        return self.path / "inventory.yaml"

    @property
    def modulepath(self) -> list[str]:
        """Module search directories, in lookup order."""
        return [str(self.path / d) for d in ("modules", "site-modules", "site")]

    @property
    def hiera_config(self) -> Path:
        return self.path / "hiera.yaml"

    @property
    def puppetfile(self) -> Path:
        return self.path / "Puppetfile"

    @property
    def rerunfile(self) -> Path:
        return self.path / ".rerun.json"

    @property
    def resource_types(self) -> Path:
        return self.path / ".resource_types"

    @property
    def downloads(self) -> Path:
        return self.path / "downloads"

    @property
    def plans_path(self) -> Path:
        return self.path / "plans"

    @property
    def managed_moduledir(self) -> str:
        return str(self.path / ".modules")

    # ── Settings accessors ──────────────────────────────────────

    @property
    def name(self) -> str | None:
        return self.settings.get("name")

    @property
    def tasks(self) -> list[str] | None:
        return self.settings.get("tasks")

    @property
    def plans(self) -> list[str] | None:
        return self.settings.get("plans")

    @property
    def modules(self) -> list[dict[str, Any]] | None:
        return self.settings.get("modules")

    @property
    def load_as_module(self) -> bool:
        """Projects with a name are loaded as a module of the same name."""
        return self.name is not None

    def project_file_exists(self) -> bool:
        return self.project_file.is_file()

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "name": self.name,
            "load_as_module": self.load_as_module,
        }
