"""
Doctor use case — report what a setup run would see, without changing anything.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from macsetup.adapters.base import PackageManager
from macsetup.core.models.config import SetupConfig
from macsetup.core.persistence.failure_log import FailureLogger
from macsetup.core.services.bootstrap import brew_path_for_arch, detect_arch

logger = logging.getLogger(__name__)


@dataclass
class DoctorResult:
    """Snapshot of the environment a setup run depends on."""

    arch: str = ""
    brew_path: str = ""
    brew_path_exists: bool = False
    manager_available: bool = False
    profile_path: str | None = None         # None when HOME is unset
    config_path: str | None = None          # None when using built-in defaults
    package_count: int = 0
    failure_log: str = ""
    failure_count: int = 0

    @property
    def will_bootstrap(self) -> bool:
        return not self.manager_available

    def to_dict(self) -> dict:
        return {
            "arch": self.arch,
            "brew_path": self.brew_path,
            "brew_path_exists": self.brew_path_exists,
            "manager_available": self.manager_available,
            "will_bootstrap": self.will_bootstrap,
            "profile_path": self.profile_path,
            "config_path": self.config_path,
            "package_count": self.package_count,
            "failure_log": self.failure_log,
            "failure_count": self.failure_count,
        }


def run_doctor(
    config: SetupConfig,
    manager: PackageManager,
    *,
    config_path: Path | None = None,
    working_dir: Path | None = None,
    arch: str | None = None,
) -> DoctorResult:
    """Probe the environment. Read-only: never installs or writes."""
    arch = arch or detect_arch()
    brew_path = brew_path_for_arch(arch)

    home = os.environ.get("HOME")
    failure_log = FailureLogger(path=(working_dir or Path.cwd()) / config.log_file)

    result = DoctorResult(
        arch=arch,
        brew_path=brew_path,
        brew_path_exists=Path(brew_path).is_file(),
        manager_available=manager.is_available(),
        profile_path=str(Path(home) / config.profile) if home else None,
        config_path=str(config_path) if config_path else None,
        package_count=len(config.packages),
        failure_log=str(failure_log.path),
        failure_count=failure_log.entry_count(),
    )
    logger.debug("Doctor: %s", result.to_dict())
    return result
