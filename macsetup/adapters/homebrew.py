"""
Homebrew adapter — the production package manager.

Classification uses ``brew info``: it exits 0 when the name is known
in the requested category. Installs and updates stream to the
terminal because they are long and interactive (sudo prompts, EULAs).
"""

from __future__ import annotations

import logging
import shlex
import shutil

from macsetup.adapters.base import PackageManager
from macsetup.adapters.shell import run_command
from macsetup.core.models.receipt import Receipt

logger = logging.getLogger(__name__)

POSIX_SHELL = "/bin/sh"


class HomebrewAdapter(PackageManager):
    """Drive the ``brew`` CLI.

    Args:
        binary: Executable name or path used for brew commands.
        stdout_to_stderr: Stream install/update output to stderr
            (used when stdout carries JSON).
    """

    def __init__(self, binary: str = "brew", stdout_to_stderr: bool = False):
        self._binary = binary
        self._stdout_to_stderr = stdout_to_stderr

    @property
    def name(self) -> str:
        return "brew"

    @property
    def binary(self) -> str:
        return self._binary

    def is_available(self) -> bool:
        return shutil.which(self._binary) is not None

    def use_binary(self, binary_path: str) -> None:
        logger.debug("Using %s for brew commands", binary_path)
        self._binary = binary_path

    # ── Classification ──────────────────────────────────────────

    def is_cask(self, package: str) -> bool:
        receipt = run_command(
            [self._binary, "info", "--cask", package],
            adapter=self.name,
            operation="info-cask",
            target=package,
        )
        return receipt.ok

    def is_formula(self, package: str) -> bool:
        receipt = run_command(
            [self._binary, "info", package],
            adapter=self.name,
            operation="info-formula",
            target=package,
        )
        return receipt.ok

    # ── Install ─────────────────────────────────────────────────

    def install_cask(self, package: str) -> Receipt:
        return self._stream([self._binary, "install", "--cask", package], "install-cask", package)

    def install_formula(self, package: str) -> Receipt:
        return self._stream([self._binary, "install", package], "install-formula", package)

    # ── Maintenance ─────────────────────────────────────────────

    def refresh_index(self) -> Receipt:
        return self._stream([self._binary, "update"], "refresh-index")

    def shellenv(self, binary_path: str) -> Receipt:
        # The shellenv output is shell code (path_helper evals,
        # ${PATH+:$PATH} expansions), so a shell applies it and
        # `env` reports the result.
        script = f'eval "$({shlex.quote(binary_path)} shellenv)" && env'
        return run_command(
            [POSIX_SHELL, "-c", script],
            adapter=self.name,
            operation="shellenv",
            target=binary_path,
        )

    def _stream(self, argv: list[str], operation: str, target: str = "") -> Receipt:
        return run_command(
            argv,
            adapter=self.name,
            operation=operation,
            target=target,
            stream=True,
            stdout_to_stderr=self._stdout_to_stderr,
        )
