"""
Domain models — Pydantic types for project resolution.

    from boltctl.core.models import Project, ProjectKind, LogEntry, Deprecation
"""

from boltctl.core.models.project import Deprecation, LogEntry, Project, ProjectKind

__all__ = [
    "Deprecation",
    "LogEntry",
    "Project",
    "ProjectKind",
]
