"""
Setup use case — bootstrap (or refresh) Homebrew, then run the install pass.

This is the top-level orchestrator behind ``macsetup install``:

    brew on PATH?  ── no ──▶ install Homebrew ─▶ set up PATH ─┐
         │                                                     │
        yes ─▶ brew update ───────────────────────────────────┤
                                                               ▼
                                                       install pass

Bootstrap, PATH setup, and index refresh failures abort the run with
exit status 1 before any package is tried. Package failures never
change the exit status; they only show up in the report.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from macsetup.adapters.base import PackageManager
from macsetup.core.errors import IndexRefreshFailure, SetupError
from macsetup.core.models.config import SetupConfig
from macsetup.core.models.outcome import PassReport
from macsetup.core.persistence.failure_log import FailureLogger
from macsetup.core.services.bootstrap import (
    brew_path_for_arch,
    detect_arch,
    install_homebrew,
    profile_path,
    setup_path,
)
from macsetup.core.services.installer import ProgressCallback, run_install_pass

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1


@dataclass
class SetupResult:
    """Result of one setup run."""

    bootstrapped: bool = False
    refreshed: bool = False
    report: PassReport | None = None
    failure_log: Path | None = None
    error: str | None = None
    error_kind: str | None = None
    events: list[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return EXIT_FATAL if self.error else EXIT_OK

    @property
    def success(self) -> bool:
        """Whole run OK: no fatal error and every package installed."""
        return self.error is None and self.report is not None and self.report.success

    def to_dict(self) -> dict:
        result: dict = {
            "bootstrapped": self.bootstrapped,
            "refreshed": self.refreshed,
            "exit_code": self.exit_code,
            "success": self.success,
        }
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
        if self.failure_log is not None:
            result["failure_log"] = str(self.failure_log)
        if self.report is not None:
            result["report"] = self.report.to_dict()
        return result


def run_setup(
    config: SetupConfig,
    manager: PackageManager,
    *,
    working_dir: Path | None = None,
    arch: str | None = None,
    on_event: Callable[[str], None] | None = None,
    on_result: ProgressCallback | None = None,
    installer: Callable[[str], None] = install_homebrew,
) -> SetupResult:
    """Run one full setup: precondition check, bootstrap/refresh, install pass.

    Args:
        config: Package list and file locations.
        manager: Package manager adapter.
        working_dir: Directory the failure log lives in (default: cwd).
        arch: CPU architecture override (default: detected).
        on_event: Called with short human-readable phase messages.
        on_result: Called with each PackageResult during the pass.
        installer: Bootstrap installer (takes the script URL).

    Returns:
        SetupResult. Never raises SetupError; fatal errors are stored
        in ``result.error`` and ``result.exit_code`` is 1.
    """
    result = SetupResult()

    def _event(message: str) -> None:
        result.events.append(message)
        logger.info(message)
        if on_event is not None:
            on_event(message)

    base_dir = working_dir or Path.cwd()
    failure_log = FailureLogger(path=base_dir / config.log_file)
    result.failure_log = failure_log.path

    try:
        # ── Precondition: is the package manager on PATH? ───────
        _event(f"Checking if {manager.name} is installed...")
        if manager.is_available():
            _event(f"{manager.name} is already installed.")
        else:
            _event(f"{manager.name} is not installed. Installing...")
            installer(config.install_script_url)
            result.bootstrapped = True

            brew_path = brew_path_for_arch(arch or detect_arch())
            setup_path(manager, brew_path, profile_path(config.profile))
            _event("PATH has been set to include Homebrew.")

        # ── Index refresh (skipped right after a bootstrap) ─────
        if result.bootstrapped:
            _event("Homebrew was just installed. Skipping update.")
        else:
            _event(f"Updating {manager.name}...")
            receipt = manager.refresh_index()
            if receipt.failed:
                raise IndexRefreshFailure(
                    f"Failed to update {manager.name}. ({receipt.error})"
                )
            result.refreshed = True

    except SetupError as e:
        logger.info("Setup aborted (%s): %s", e.kind, e)
        result.error = str(e)
        result.error_kind = e.kind
        return result

    # ── Install pass ────────────────────────────────────────────
    _event("Installing all packages...")
    result.report = run_install_pass(
        config.packages,
        manager,
        failure_log,
        on_result=on_result,
    )
    return result
