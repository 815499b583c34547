"""
boltctl — CLI entrypoint.

Usage:
    python -m boltctl.main --help
    python -m boltctl.main project show
    python -m boltctl.main --project ./Boltdir project check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from boltctl import __version__
from boltctl.core.config.validator import builtin_modules_from_dir
from boltctl.core.observability.logging_config import replay_project_logs, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="boltctl")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--project",
    "project_path",
    type=click.Path(exists=False, file_okay=False),
    default=None,
    help="Project directory (default: $BOLT_PROJECT, else search upward).",
)
@click.option(
    "--builtin-modules",
    "builtin_modules_dir",
    type=click.Path(exists=True, file_okay=False),
    envvar="BOLTCTL_BUILTIN_MODULES",
    default=None,
    help="Directory of built-in modules whose names a project may not use.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    project_path: str | None,
    builtin_modules_dir: str | None,
) -> None:
    """boltctl — resolve and validate Bolt projects."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["project_path"] = Path(project_path) if project_path else None
    ctx.obj["builtin_modules"] = (
        builtin_modules_from_dir(Path(builtin_modules_dir)) if builtin_modules_dir else None
    )

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("BOLTCTL_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("BOLTCTL_LOG_FILE"),
        log_file_level=os.environ.get("BOLTCTL_LOG_FILE_LEVEL"),
    )


@cli.group()
def project() -> None:
    """Project resolution commands."""


@project.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def project_show(ctx: click.Context, as_json: bool) -> None:
    """Show which project this invocation resolves to."""
    from boltctl.core.config.errors import ProjectError
    from boltctl.core.config.loader import select_project

    try:
        resolved = select_project(
            option=ctx.obj.get("project_path"),
            builtin_modules=ctx.obj.get("builtin_modules"),
        )
    except ProjectError as e:
        if as_json:
            click.echo(json.dumps({"error": e.to_dict()}, indent=2, default=str))
        else:
            click.secho(f"❌ {e.message}", fg="red")
        sys.exit(1)

    replay_project_logs(resolved)

    if as_json:
        data = resolved.to_dict()
        data.update({
            "kind": resolved.kind.value,
            "config_file": str(resolved.config_file),
            "inventory_file": str(resolved.inventory_file),
            "modulepath": resolved.modulepath,
            "hiera_config": str(resolved.hiera_config),
            "puppetfile": str(resolved.puppetfile),
            "tasks": resolved.tasks,
            "plans": resolved.plans,
        })
        click.echo(json.dumps(data, indent=2, default=str))
        return

    if not ctx.obj.get("quiet", False):
        click.secho(f"\n📁 {resolved.path}", fg="cyan", bold=True)
        click.echo(f"   Kind: {resolved.kind.value}")
        if resolved.name:
            click.echo(f"   Name: {resolved.name}")
        click.echo(f"   Config file: {resolved.config_file}")
        click.echo(f"   Inventory: {resolved.inventory_file}")
        click.echo(f"   Modulepath: {':'.join(resolved.modulepath)}")
        click.echo()


@project.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def project_check(ctx: click.Context, as_json: bool) -> None:
    """Validate the project's bolt-project.yaml."""
    from boltctl.core.use_cases.project_check import check_project

    result = check_project(
        option=ctx.obj.get("project_path"),
        builtin_modules=ctx.obj.get("builtin_modules"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.project is not None  # guaranteed when valid
        click.secho("✅ Project is valid", fg="green", bold=True)
        click.echo(f"   Path: {result.project.path}")
        click.echo(f"   Kind: {result.project.kind.value}")
        if result.project.name:
            click.echo(f"   Name: {result.project.name}")
    else:
        click.secho("❌ Project errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if result.deprecations:
        click.echo()
        click.secho("⚠️  Deprecations:", fg="yellow")
        for dep in result.deprecations:
            click.echo(f"   • {dep}")

    click.echo()
    if not result.valid:
        sys.exit(1)


if __name__ == "__main__":
    cli()
