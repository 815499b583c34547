"""
Project loader — decides which directory is the project and loads it.

This is the primary entry point for project resolution:

    - select_project()   option  >  BOLT_PROJECT  >  upward search
    - find_project()     walk up from a directory looking for markers
    - create_project()   apply creation/existence/security policy, load
    - default_project()  ~/.puppetlabs/bolt, else the system path

Every call threads a ``logs`` list; the returned Project carries the
accumulated entries. Nothing here writes to the logging system on the
caller's behalf beyond its own debug diagnostics.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable, Mapping
from pathlib import Path

from boltctl.core.config import options
from boltctl.core.config.builder import build_project, check_deprecated_file
from boltctl.core.config.errors import ProjectNotFoundError, WorldWritableError
from boltctl.core.config.settings import read_optional_yaml_mapping
from boltctl.core.models.project import LogEntry, Project, ProjectKind

logger = logging.getLogger(__name__)


def user_project_path() -> Path | None:
    """The per-user default project, or None if there is no home directory."""
    expanded = os.path.expanduser(options.USER_PROJECT_DIR)
    if expanded.startswith("~"):
        return None
    return Path(expanded)


def default_location() -> tuple[Path, ProjectKind]:
    """Where the default project lives, and which kind that makes it."""
    user_path = user_project_path()
    if user_path is not None:
        return user_path, ProjectKind.USER
    return options.system_path(), ProjectKind.SYSTEM


def _is_world_writable(path: Path) -> bool:
    if not path.exists():
        return False
    return bool(path.stat().st_mode & stat.S_IWOTH)


def create_project(
    path: Path | str,
    kind: ProjectKind = ProjectKind.OPTION,
    logs: list[LogEntry] | None = None,
    builtin_modules: Iterable[str] | None = None,
) -> Project:
    """Load the project rooted at ``path``.

    Args:
        path: Project directory (``~`` is expanded).
        kind: How the directory was chosen; drives the policy below.
        logs: Entries accumulated so far.
        builtin_modules: Reserved module names for validation.

    Raises:
        ProjectNotFoundError: ``kind`` is OPTION and the directory is missing.
        WorldWritableError: The directory is world-writable (POSIX only,
            skipped for ENVIRONMENT).
        SettingsParseError: bolt-project.yaml is malformed.
        ValidationError: bolt-project.yaml settings are invalid.
    """
    logs = logs if logs is not None else []
    fullpath = Path(path).expanduser().resolve()

    if kind.creates_directory:
        try:
            fullpath.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug("Cannot create %s: %s", fullpath, e)
            logs.append(LogEntry(
                level="warn",
                message=(
                    f"Could not create default project at {fullpath}. Continuing without a "
                    "writeable project. Log and rerun files will not be written."
                ),
            ))

    if kind.must_exist and not fullpath.is_dir():
        raise ProjectNotFoundError(fullpath)

    if not options.is_windows() and kind.checks_world_writable and _is_world_writable(fullpath):
        raise WorldWritableError(fullpath)

    project_file = fullpath / options.PROJECT_FILE
    data = read_optional_yaml_mapping(project_file, "project")

    if project_file.exists():
        default = "default " if kind.is_default else ""
        logs.append(LogEntry(level="info", message=f"Loaded {default}project from '{fullpath}'"))

    return build_project(data, fullpath, kind, logs, builtin_modules=builtin_modules)


def default_project(
    logs: list[LogEntry] | None = None,
    builtin_modules: Iterable[str] | None = None,
) -> Project:
    """Load the per-user default project, or the system one without a home."""
    path, kind = default_location()
    return create_project(path, kind, logs, builtin_modules=builtin_modules)


def find_project(
    start_dir: Path | str,
    logs: list[LogEntry] | None = None,
    builtin_modules: Iterable[str] | None = None,
) -> Project:
    """Search upward from ``start_dir`` for a project.

    At each directory, in order:
        1. a Boltdir subdirectory  → that subdirectory, EMBEDDED
        2. bolt.yaml or bolt-project.yaml here → this directory, LOCAL
        3. filesystem root → the default project
    Otherwise move to the parent.
    """
    logs = logs if logs is not None else []
    current = Path(start_dir).expanduser().resolve()

    while True:
        boltdir = current / options.BOLTDIR_NAME
        if boltdir.is_dir():
            return create_project(boltdir, ProjectKind.EMBEDDED, logs, builtin_modules)

        if (current / options.LEGACY_CONFIG_FILE).is_file() or (current / options.PROJECT_FILE).is_file():
            return create_project(current, ProjectKind.LOCAL, logs, builtin_modules)

        if current.parent == current:
            return default_project(logs, builtin_modules)

        logs.append(LogEntry(
            level="debug",
            message=(
                f"Did not detect {options.BOLTDIR_NAME}, {options.LEGACY_CONFIG_FILE}, or "
                f"{options.PROJECT_FILE} at '{current}'. This directory won't be loaded as a project."
            ),
        ))
        current = current.parent


def select_project(
    option: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
    cwd: Path | str | None = None,
    logs: list[LogEntry] | None = None,
    builtin_modules: Iterable[str] | None = None,
) -> Project:
    """Pick the project for an invocation.

    Precedence: explicit ``option`` > ``BOLT_PROJECT`` > upward search
    from ``cwd`` (default: the current directory).
    """
    environ = os.environ if environ is None else environ
    logs = logs if logs is not None else []

    if option:
        project = create_project(option, ProjectKind.OPTION, logs, builtin_modules)
    elif environ.get(options.PROJECT_ENV_VAR):
        project = create_project(
            environ[options.PROJECT_ENV_VAR], ProjectKind.ENVIRONMENT, logs, builtin_modules
        )
    else:
        project = find_project(cwd or Path.cwd(), logs, builtin_modules)

    check_deprecated_file(project)
    logger.debug("Selected %s project at %s", project.kind.value, project.path)
    return project
