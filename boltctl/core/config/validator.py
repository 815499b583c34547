"""
Project validator — structural checks for bolt-project.yaml settings.

Rules are declared in ``SCHEMA`` (key → checker, plus an optional hook
for when the key is absent) and applied in order. The first structural
violation raises; advisory findings are appended to ``project.logs``.
Settings are never modified.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from boltctl.core.config.errors import (
    InvalidNameError,
    ModuleDeclarationError,
    NameCollisionError,
    WrongTypeError,
)
from boltctl.core.config.options import (
    BUILTIN_MODULES,
    MODULE_DECLARATION_KEYS,
    MODULE_NAME_PATTERN,
    PROJECT_FILE,
)
from boltctl.core.models.project import LogEntry, Project

_NAME_RE = re.compile(MODULE_NAME_PATTERN)


@dataclass(frozen=True)
class ValidationContext:
    """What a rule needs besides the value itself."""

    project: Project
    builtin_modules: frozenset[str]

    def warn(self, message: str) -> None:
        self.project.logs.append(LogEntry(level="warn", message=message))


Checker = Callable[[ValidationContext, str, Any], None]


@dataclass(frozen=True)
class SettingRule:
    """One recognized top-level setting.

    ``unset_if_false`` treats an explicit ``null`` or ``false`` the same as an
    absent key.
    """

    key: str
    check: Checker
    on_missing: Callable[[ValidationContext], None] | None = None
    unset_if_false: bool = False


# ── Checkers ────────────────────────────────────────────────────


def _check_name(ctx: ValidationContext, key: str, value: Any) -> None:
    if not isinstance(value, str) or not _NAME_RE.fullmatch(value):
        raise InvalidNameError(
            f"Invalid project name '{value}' in {PROJECT_FILE}; project name must begin "
            "with a lowercase letter and can include lowercase letters, numbers, and "
            "underscores.",
            {"name": value},
        )
    if value in ctx.builtin_modules:
        raise NameCollisionError(
            f"The project '{value}' will not be loaded. The project name conflicts with "
            "a built-in Bolt module of the same name.",
            {"name": value},
        )


def _missing_name(ctx: ValidationContext) -> None:
    ctx.warn(
        f"No project name is specified in {PROJECT_FILE}. "
        "Project-level content will not be available."
    )


def _check_list(ctx: ValidationContext, key: str, value: Any) -> None:
    if not isinstance(value, list):
        raise WrongTypeError(
            f"'{key}' in {PROJECT_FILE} must be an array",
            {"key": key, "value": value},
        )


def _check_modules(ctx: ValidationContext, key: str, value: Any) -> None:
    _check_list(ctx, key, value)

    for mod in value:
        if not (isinstance(mod, dict) and "name" in mod):
            raise ModuleDeclarationError(
                f"Module declaration {mod!r} must be a hash with a name key",
                {"declaration": mod},
            )

    unknown: list[str] = []
    for mod in value:
        for k in mod:
            if k not in MODULE_DECLARATION_KEYS and k not in unknown:
                unknown.append(k)
    if unknown:
        ctx.warn(f"Ignoring unknown keys in module declarations: {', '.join(map(str, unknown))}.")


SCHEMA: tuple[SettingRule, ...] = (
    SettingRule("name", _check_name, on_missing=_missing_name, unset_if_false=True),
    SettingRule("tasks", _check_list),
    SettingRule("plans", _check_list),
    SettingRule("modules", _check_modules, unset_if_false=True),
)


def builtin_modules_from_dir(path: Path) -> frozenset[str]:
    """Names of the built-in modules installed under ``path``."""
    if not path.is_dir():
        return frozenset()
    return frozenset(child.name for child in path.iterdir())


def validate(
    project: Project,
    builtin_modules: Iterable[str] | None = None,
    schema: Iterable[SettingRule] = SCHEMA,
) -> None:
    """Validate a project's settings.

    Args:
        project: The project to check; warnings land in ``project.logs``.
        builtin_modules: Reserved module names. Defaults to ``BUILTIN_MODULES``.
        schema: Rules to apply, in order.

    Raises:
        ValidationError: On the first structural violation.
    """
    ctx = ValidationContext(
        project=project,
        builtin_modules=frozenset(BUILTIN_MODULES if builtin_modules is None else builtin_modules),
    )
    settings = project.settings

    for rule in schema:
        value = settings.get(rule.key)
        unset = value is None or value is False
        if rule.key not in settings or (rule.unset_if_false and unset):
            if rule.on_missing:
                rule.on_missing(ctx)
            continue
        rule.check(ctx, rule.key, value)
