"""
Logging configuration — central setup for the CLI entrypoint.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    CLI flag  >  BOLTCTL_LOG_LEVEL env var  >  WARNING (default)

Optional file output via BOLTCTL_LOG_FILE / BOLTCTL_LOG_FILE_LEVEL env vars.

Project resolution does not log directly: it accumulates entries on the
Project, and ``replay_project_logs`` delivers them through the
``boltctl.project`` logger.  Those records are rendered the way the
operator sees them in Bolt's own output (``Warning: ...``,
``Deprecation [type]: ...``) rather than with module diagnostics.
"""

from __future__ import annotations

import logging
import sys

from boltctl.core.models.project import Project

PROJECT_LOGGER = "boltctl.project"

# Diagnostic formats, by console verbosity
_FMT_MINIMAL = "%(message)s"
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_CONSOLE = "%H:%M:%S"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# Labels for entries replayed from a Project
_PROJECT_LABELS = {
    logging.DEBUG: "Debug",
    logging.INFO: "Info",
    logging.WARNING: "Warning",
    logging.ERROR: "Error",
}


class ProjectRecordFormatter(logging.Formatter):
    """Render replayed project entries plainly; defer everything else.

    A record from ``PROJECT_LOGGER`` becomes ``<Label>: <message>``, or
    ``Deprecation [<type>]: <message>`` when it carries a
    ``deprecation_type`` attribute.  Other records use ``fmt``.
    """

    def format(self, record: logging.LogRecord) -> str:
        if record.name != PROJECT_LOGGER:
            return super().format(record)

        message = record.getMessage()
        deprecation_type = getattr(record, "deprecation_type", None)
        if deprecation_type:
            return f"Deprecation [{deprecation_type}]: {message}"
        label = _PROJECT_LABELS.get(record.levelno, record.levelname.title())
        return f"{label}: {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
    """
    numeric_level = _parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt = _FMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt = _FMT_VERBOSE
    else:
        fmt = _FMT_MINIMAL

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(ProjectRecordFormatter(fmt, datefmt=_DATEFMT_CONSOLE))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)
    logging.raiseExceptions = False


def replay_project_logs(project: Project, logger: logging.Logger | None = None) -> None:
    """Emit a project's accumulated log entries, then its deprecations."""
    logger = logger or logging.getLogger(PROJECT_LOGGER)
    for entry in project.logs:
        logger.log(entry.levelno, entry.message)
    for dep in project.deprecations:
        logger.warning(dep.message, extra={"deprecation_type": dep.type})


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
