"""
CLI commands for the package list.

Thin wrappers over ``macsetup.core.services.installer``.
"""

from __future__ import annotations

import json
import sys

import click

from macsetup.ui.cli.helpers import get_manager, load_config_or_exit


@click.group()
def packages() -> None:
    """Packages — list and classify."""


@packages.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_packages(ctx: click.Context, as_json: bool) -> None:
    """Show the configured package list, in install order."""
    config = load_config_or_exit(ctx)

    if as_json:
        click.echo(json.dumps({"packages": config.packages, "count": len(config.packages)}, indent=2))
        return

    click.secho(f"📦 Packages ({len(config.packages)}):", fg="cyan", bold=True)
    for i, name in enumerate(config.packages, start=1):
        click.echo(f"   {i:>3}. {name}")
    click.echo()


@packages.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def classify(ctx: click.Context, names: tuple[str, ...], as_json: bool) -> None:
    """Ask the package manager whether each NAME is a cask or a formula.

    Nothing is installed.
    """
    from macsetup.core.services.installer import classify as classify_package

    manager = get_manager(ctx)
    if not manager.is_available():
        click.secho(f"❌ {manager.name} is not installed", fg="red")
        sys.exit(1)

    results = {name: classify_package(name, manager) for name in names}

    if as_json:
        click.echo(json.dumps(results, indent=2))
        return

    for name, category in results.items():
        if category is None:
            click.secho(f"   ✗ {name:<30} not found", fg="yellow")
        else:
            click.secho(f"   ✓ {name:<30} {category}", fg="green")
