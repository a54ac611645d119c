"""
macsetup — CLI entrypoint.

Usage:
    macsetup --help
    macsetup install
    macsetup doctor
    python -m macsetup.main install
"""

from __future__ import annotations

import functools
import json
import os
import sys
from pathlib import Path

import click

from macsetup import __version__
from macsetup.core.models.outcome import InstallOutcome, PackageResult
from macsetup.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)
from macsetup.ui.cli.helpers import get_manager, load_config_or_exit, resolve_config_path
from macsetup.ui.cli.packages import packages


@click.group()
@click.version_option(version=__version__, prog_name="macsetup")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to macsetup.yml (default: auto-detect, else built-in list).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """macsetup — install Homebrew and your packages on a new Mac."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )


def _echo_result(result: PackageResult) -> None:
    """Print one package outcome as it happens."""
    if result.outcome == InstallOutcome.CASK_INSTALLED:
        click.secho(f"   ✓ Installed cask: {result.package}", fg="green")
    elif result.outcome == InstallOutcome.FORMULA_INSTALLED:
        click.secho(f"   ✓ Installed formula: {result.package}", fg="green")
    elif result.outcome == InstallOutcome.INSTALL_FAILED:
        logged = " (logged)" if result.logged else ""
        click.secho(
            f"   ✗ Failed to install {result.category}: {result.package}{logged}",
            fg="red",
        )
    else:
        click.secho(
            f"   ⚠️  Package {result.package} not found in Homebrew repositories.",
            fg="yellow",
        )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, as_json: bool) -> None:
    """Install Homebrew if needed, then every configured package.

    Exits 1 only if Homebrew can't be installed, put on PATH, or
    updated. Individual package failures are reported but still
    exit 0; failed casks are appended to the failure log.
    """
    from macsetup.core.services.bootstrap import install_homebrew
    from macsetup.core.use_cases.setup import EXIT_FATAL, run_setup

    config = load_config_or_exit(ctx)
    # With --json, stdout carries only the JSON document
    manager = get_manager(ctx, stdout_to_stderr=as_json)
    quiet = ctx.obj.get("quiet", False)

    if not as_json:
        click.secho("\n🍺 Starting Homebrew and package setup...", fg="cyan", bold=True)

    result = run_setup(
        config,
        manager,
        on_event=None if (as_json or quiet) else (lambda msg: click.echo(f"   {msg}")),
        on_result=None if as_json else _echo_result,
        installer=functools.partial(install_homebrew, stdout_to_stderr=as_json),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(result.exit_code)

    report = result.report
    if report is None:
        click.secho("❌ Install pass did not run.", fg="red")
        sys.exit(EXIT_FATAL)

    click.echo()
    if report.success:
        click.secho("✅ All packages installed successfully.", fg="green", bold=True)
    else:
        click.secho(
            f"⚠️  Some packages failed to install "
            f"({report.succeeded}/{report.total} succeeded).",
            fg="yellow",
            bold=True,
        )
        if any(r.logged for r in report.results):
            click.echo(f"   Cask failures logged to {result.failure_log}")
    click.echo("Script completed.")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def doctor(ctx: click.Context, as_json: bool) -> None:
    """Show what a setup run would see: arch, brew, profile, config, log."""
    from macsetup.core.use_cases.doctor import run_doctor

    config = load_config_or_exit(ctx)
    result = run_doctor(
        config,
        get_manager(ctx),
        config_path=resolve_config_path(ctx),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    def _mark(ok: bool) -> str:
        return "✅" if ok else "❌"

    click.secho("\n🩺 macsetup doctor", fg="cyan", bold=True)
    click.echo(f"   Architecture:  {result.arch}")
    click.echo(f"   Brew path:     {result.brew_path} {_mark(result.brew_path_exists)}")
    click.echo(f"   Brew on PATH:  {_mark(result.manager_available)}")
    if result.will_bootstrap:
        click.secho("      → 'macsetup install' will bootstrap Homebrew first", fg="yellow")
    click.echo(f"   Profile:       {result.profile_path or '(HOME not set)'}")
    click.echo(f"   Config:        {result.config_path or '(built-in defaults)'}")
    click.echo(f"   Packages:      {result.package_count}")
    click.echo(f"   Failure log:   {result.failure_log} ({result.failure_count} records)")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def log(ctx: click.Context, as_json: bool) -> None:
    """Show cask install failures recorded in the failure log."""
    from macsetup.core.persistence.failure_log import FailureLogger

    config = load_config_or_exit(ctx)
    failure_log = FailureLogger(path=Path.cwd() / config.log_file)
    entries = failure_log.entries()

    if as_json:
        click.echo(json.dumps(
            {
                "path": str(failure_log.path),
                "entries": [{"timestamp": ts, "package": pkg} for ts, pkg in entries],
            },
            indent=2,
        ))
        return

    if not entries:
        click.secho("✅ No recorded failures", fg="green")
        return

    click.secho(f"📝 {failure_log.path} ({len(entries)} records):", fg="cyan", bold=True)
    for ts, pkg in entries:
        click.echo(f"   {ts}  {pkg}")
    click.echo()


cli.add_command(packages)


if __name__ == "__main__":
    cli()
