"""
Shared helpers for CLI commands — config and package-manager resolution.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from macsetup.adapters.base import PackageManager
from macsetup.core.models.config import SetupConfig


def resolve_config_path(ctx: click.Context) -> Path | None:
    """Explicit --config, else macsetup.yml found upward from CWD."""
    config_path: Path | None = ctx.obj.get("config_path")
    if config_path is None:
        from macsetup.core.config.loader import find_config_file

        config_path = find_config_file()
    return config_path


def load_config_or_exit(ctx: click.Context) -> SetupConfig:
    """Load the setup config; print the error and exit 1 if it's invalid."""
    from macsetup.core.config.loader import ConfigError, load_config

    try:
        return load_config(resolve_config_path(ctx), search=False)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def get_manager(ctx: click.Context, stdout_to_stderr: bool = False) -> PackageManager:
    """Package manager for this invocation.

    ``stdout_to_stderr`` keeps streamed brew output off stdout (for
    ``--json``). Tests inject a manager through
    ``CliRunner.invoke(..., obj={"manager": ...})``.
    """
    manager = ctx.obj.get("manager")
    if manager is None:
        from macsetup.adapters.homebrew import HomebrewAdapter

        manager = HomebrewAdapter(stdout_to_stderr=stdout_to_stderr)
        ctx.obj["manager"] = manager
    return manager
