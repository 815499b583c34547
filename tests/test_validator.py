"""
Tests for the project validator — bolt-project.yaml structure.
"""

from pathlib import Path

import pytest

from boltctl.core.config.errors import (
    InvalidNameError,
    ModuleDeclarationError,
    NameCollisionError,
    ValidationError,
    WrongTypeError,
)
from boltctl.core.config.validator import builtin_modules_from_dir, validate
from boltctl.core.models.project import Project


def _project(tmp_path: Path, settings: dict) -> Project:
    return Project(path=tmp_path, settings=settings, config_file=tmp_path / "bolt.yaml")


def _warnings(project: Project) -> list[str]:
    return [e.message for e in project.logs if e.level == "warn"]


class TestName:
    """Tests for the 'name' setting."""

    def test_valid_name(self, tmp_path: Path):
        project = _project(tmp_path, {"name": "foo"})
        validate(project)
        assert project.name == "foo"
        assert _warnings(project) == []

    def test_digits_and_underscores(self, tmp_path: Path):
        validate(_project(tmp_path, {"name": "my_project2"}))

    def test_uppercase_is_invalid(self, tmp_path: Path):
        with pytest.raises(InvalidNameError, match="Invalid project name 'Foo'") as exc:
            validate(_project(tmp_path, {"name": "Foo"}))
        assert exc.value.kind == "bolt/invalid-project-name"

    def test_leading_digit_is_invalid(self, tmp_path: Path):
        with pytest.raises(InvalidNameError):
            validate(_project(tmp_path, {"name": "1foo"}))

    def test_hyphen_is_invalid(self, tmp_path: Path):
        with pytest.raises(InvalidNameError):
            validate(_project(tmp_path, {"name": "my-project"}))

    def test_non_string_is_invalid(self, tmp_path: Path):
        with pytest.raises(InvalidNameError):
            validate(_project(tmp_path, {"name": 42}))

    def test_trailing_newline_is_invalid(self, tmp_path: Path):
        with pytest.raises(InvalidNameError):
            validate(_project(tmp_path, {"name": "foo\n"}))

    def test_builtin_collision(self, tmp_path: Path):
        with pytest.raises(NameCollisionError, match="conflicts with a built-in") as exc:
            validate(_project(tmp_path, {"name": "boltlib"}))
        assert exc.value.kind == "bolt/project-name-collision"

    def test_custom_builtins(self, tmp_path: Path):
        validate(_project(tmp_path, {"name": "boltlib"}), builtin_modules=["other"])
        with pytest.raises(NameCollisionError):
            validate(_project(tmp_path, {"name": "other"}), builtin_modules=["other"])

    def test_builtins_from_dir(self, tmp_path: Path):
        builtin_dir = tmp_path / "bolt-modules"
        (builtin_dir / "aggregate").mkdir(parents=True)
        (builtin_dir / "canary").mkdir()
        assert builtin_modules_from_dir(builtin_dir) == {"aggregate", "canary"}
        assert builtin_modules_from_dir(tmp_path / "missing") == frozenset()

    def test_missing_name_warns(self, tmp_path: Path):
        project = _project(tmp_path, {})
        validate(project)
        assert _warnings(project) == [
            "No project name is specified in bolt-project.yaml. "
            "Project-level content will not be available."
        ]

    def test_null_name_warns(self, tmp_path: Path):
        project = _project(tmp_path, {"name": None})
        validate(project)
        assert len(_warnings(project)) == 1

    def test_false_name_warns(self, tmp_path: Path):
        project = _project(tmp_path, {"name": False})
        validate(project)
        assert len(_warnings(project)) == 1


class TestTasksAndPlans:
    """Tests for the 'tasks' and 'plans' settings."""

    def test_lists_are_valid(self, tmp_path: Path):
        validate(_project(tmp_path, {"name": "foo", "tasks": ["foo::a"], "plans": []}))

    def test_tasks_string_raises(self, tmp_path: Path):
        with pytest.raises(WrongTypeError, match="'tasks' in bolt-project.yaml must be an array") as exc:
            validate(_project(tmp_path, {"name": "foo", "tasks": "not-a-list"}))
        assert exc.value.kind == "bolt/invalid-setting-type"
        assert exc.value.details["key"] == "tasks"

    def test_plans_mapping_raises(self, tmp_path: Path):
        with pytest.raises(WrongTypeError, match="'plans'"):
            validate(_project(tmp_path, {"name": "foo", "plans": {"a": 1}}))

    def test_null_tasks_raises(self, tmp_path: Path):
        with pytest.raises(WrongTypeError, match="'tasks'"):
            validate(_project(tmp_path, {"name": "foo", "tasks": None}))

    def test_false_plans_raises(self, tmp_path: Path):
        with pytest.raises(WrongTypeError, match="'plans'"):
            validate(_project(tmp_path, {"name": "foo", "plans": False}))

    def test_name_checked_before_tasks(self, tmp_path: Path):
        with pytest.raises(InvalidNameError):
            validate(_project(tmp_path, {"name": "Foo", "tasks": "nope"}))


class TestModules:
    """Tests for the 'modules' setting."""

    def test_valid_declarations(self, tmp_path: Path):
        project = _project(tmp_path, {
            "name": "foo",
            "modules": [{"name": "puppetlabs/stdlib", "version_requirement": "6.0.0"}],
        })
        validate(project)
        assert _warnings(project) == []

    def test_null_modules_allowed(self, tmp_path: Path):
        validate(_project(tmp_path, {"name": "foo", "modules": None}))

    def test_false_modules_allowed(self, tmp_path: Path):
        validate(_project(tmp_path, {"name": "foo", "modules": False}))

    def test_zero_modules_is_not_false(self, tmp_path: Path):
        with pytest.raises(WrongTypeError, match="'modules'"):
            validate(_project(tmp_path, {"name": "foo", "modules": 0}))

    def test_not_a_list(self, tmp_path: Path):
        with pytest.raises(WrongTypeError, match="'modules'"):
            validate(_project(tmp_path, {"name": "foo", "modules": {"name": "a"}}))

    def test_entry_without_name(self, tmp_path: Path):
        with pytest.raises(ModuleDeclarationError, match="version_requirement") as exc:
            validate(_project(tmp_path, {
                "name": "foo",
                "modules": [{"name": "a"}, {"version_requirement": "1.0"}],
            }))
        assert exc.value.details["declaration"] == {"version_requirement": "1.0"}
        assert exc.value.kind == "bolt/invalid-module-declaration"
        assert isinstance(exc.value, ValidationError)

    def test_scalar_entry(self, tmp_path: Path):
        with pytest.raises(ModuleDeclarationError, match="'puppetlabs/stdlib'"):
            validate(_project(tmp_path, {"name": "foo", "modules": ["puppetlabs/stdlib"]}))

    def test_unknown_keys_single_warning(self, tmp_path: Path):
        project = _project(tmp_path, {"name": "foo", "modules": [{"name": "a", "extra": 1}]})
        validate(project)
        assert _warnings(project) == ["Ignoring unknown keys in module declarations: extra."]

    def test_unknown_keys_are_distinct(self, tmp_path: Path):
        project = _project(tmp_path, {
            "name": "foo",
            "modules": [
                {"name": "a", "extra": 1, "git": "x"},
                {"name": "b", "extra": 2},
            ],
        })
        validate(project)
        assert _warnings(project) == ["Ignoring unknown keys in module declarations: extra, git."]

    def test_settings_not_mutated(self, tmp_path: Path):
        settings = {"name": "foo", "modules": [{"name": "a", "extra": 1}]}
        project = _project(tmp_path, settings)
        validate(project)
        assert project.settings == {"name": "foo", "modules": [{"name": "a", "extra": 1}]}
