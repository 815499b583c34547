"""
Well-known names — marker files, derived paths, and option namespaces.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path

# ── Markers ─────────────────────────────────────────────────────

BOLTDIR_NAME = "Boltdir"
PROJECT_FILE = "bolt-project.yaml"
LEGACY_CONFIG_FILE = "bolt.yaml"
OBSOLETE_PROJECT_FILE = "project.yaml"

PROJECT_ENV_VAR = "BOLT_PROJECT"

# ── Default locations ───────────────────────────────────────────

USER_PROJECT_DIR = os.path.join("~", ".puppetlabs", "bolt")


def is_windows() -> bool:
    """True on platforms without meaningful world-writable semantics."""
    return platform.system().lower() == "windows"


def system_path() -> Path:
    """System-wide configuration directory."""
    if is_windows():
        program_data = os.environ.get("PROGRAMDATA", r"C:\ProgramData")
        return Path(program_data) / "PuppetLabs" / "bolt"
    return Path("/etc/puppetlabs/bolt")


# ── Setting namespaces ──────────────────────────────────────────

# Transport configuration belongs in inventory.yaml
INVENTORY_OPTIONS = frozenset({
    "docker",
    "local",
    "pcp",
    "remote",
    "ssh",
    "transport",
    "winrm",
})

# General tool options; their presence makes bolt-project.yaml the config file
BOLT_OPTIONS = frozenset({
    "apply_settings",
    "color",
    "compile-concurrency",
    "concurrency",
    "format",
    "hiera-config",
    "inventory-config",
    "inventoryfile",
    "log",
    "modulepath",
    "plugin_hooks",
    "plugins",
    "puppetdb",
    "puppetfile",
    "save-rerun",
    "spinner",
    "trusted-external-command",
})

# Modules shipped with the tool; a project may not share their names
BUILTIN_MODULES = frozenset({
    "boltlib",
    "ctrl",
    "dir",
    "file",
    "out",
    "prompt",
    "system",
})

MODULE_NAME_PATTERN = r"[a-z][a-z0-9_]*"

MODULE_DECLARATION_KEYS = ("name", "version_requirement")
