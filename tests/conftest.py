"""
Shared test fixtures and configuration.
"""

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep tests away from the real home directory and BOLT_PROJECT."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("BOLT_PROJECT", raising=False)
    monkeypatch.delenv("BOLTCTL_BUILTIN_MODULES", raising=False)
    old_umask = os.umask(0o022)
    yield home
    os.umask(old_umask)


@pytest.fixture
def home(isolated_env: Path) -> Path:
    """The fake home directory used by the default project."""
    return isolated_env


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An empty directory to build a project in."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def write_file():
    """Write text to a file under a directory, creating parents."""

    def _write(base: Path, name: str, content: str = "") -> Path:
        path = base / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
