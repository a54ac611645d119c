"""
Install pass — one best-effort sweep over the package list.

For each name, in order:

1. If the package manager knows it as a cask, install it as a cask.
   A failed cask install is written to the failure log.
2. Otherwise, if it is a formula, install it as a formula. A failed
   formula install is reported but NOT written to the failure log.
3. Otherwise it is reported as not found (not logged either).

A failure never stops the pass; the next package is always tried.
Only cask failures reach the log file. Formula and not-found failures
show up in the report alone.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Literal

from macsetup.adapters.base import PackageManager
from macsetup.core.models.outcome import InstallOutcome, PackageResult, PassReport
from macsetup.core.persistence.failure_log import FailureLogger

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[PackageResult], None]

Category = Literal["cask", "formula"]


def classify(package: str, manager: PackageManager) -> Category | None:
    """Which category the package manager files ``package`` under.

    Casks win: a name known as both is treated as a cask. The formula
    query only runs when the cask query says no.
    """
    if manager.is_cask(package):
        return "cask"
    if manager.is_formula(package):
        return "formula"
    return None


def install_package(
    package: str,
    manager: PackageManager,
    failure_log: FailureLogger,
) -> PackageResult:
    """Classify and install a single package."""
    start = time.monotonic()
    category = classify(package, manager)

    if category == "cask":
        logger.info("Installing cask: %s", package)
        receipt = manager.install_cask(package)
        if receipt.ok:
            result = PackageResult(
                package=package,
                outcome=InstallOutcome.CASK_INSTALLED,
                category="cask",
            )
        else:
            logger.info("Failed to install cask: %s", package)
            failure_log.record(package)
            result = PackageResult(
                package=package,
                outcome=InstallOutcome.INSTALL_FAILED,
                category="cask",
                error=receipt.error,
                logged=True,
            )

    elif category == "formula":
        logger.info("Installing formula: %s", package)
        receipt = manager.install_formula(package)
        if receipt.ok:
            result = PackageResult(
                package=package,
                outcome=InstallOutcome.FORMULA_INSTALLED,
                category="formula",
            )
        else:
            logger.info("Failed to install formula: %s", package)
            result = PackageResult(
                package=package,
                outcome=InstallOutcome.INSTALL_FAILED,
                category="formula",
                error=receipt.error,
            )

    else:
        logger.info("Package %s not found in %s repositories", package, manager.name)
        result = PackageResult(
            package=package,
            outcome=InstallOutcome.NOT_FOUND,
            error=f"Package {package} not found in {manager.name} repositories.",
        )

    result.duration_ms = int((time.monotonic() - start) * 1000)
    return result


def run_install_pass(
    packages: Sequence[str],
    manager: PackageManager,
    failure_log: FailureLogger,
    on_result: ProgressCallback | None = None,
) -> PassReport:
    """Install every package in ``packages``, in order.

    Args:
        packages: Package names; order is install order.
        manager: Package manager to classify and install with.
        failure_log: Where failed cask installs are recorded.
        on_result: Called with each PackageResult as soon as it exists.

    Returns:
        PassReport; ``report.success`` is True only if every package
        installed.
    """
    report = PassReport()
    logger.info("Installing %d packages with %s", len(packages), manager.name)

    for package in packages:
        result = install_package(package, manager, failure_log)
        report.add(result)
        if on_result is not None:
            on_result(result)

    logger.info(
        "Install pass finished: %d/%d succeeded",
        report.succeeded, report.total,
    )
    return report
