"""
Mock package manager — test double for the install pass.

Simulates Homebrew without touching the system. Knows a fixed set of
casks and formulas, and can be told which installs fail.
"""

from __future__ import annotations

from collections.abc import Iterable

from macsetup.adapters.base import PackageManager
from macsetup.core.models.receipt import Receipt


class MockPackageManager(PackageManager):
    """Configurable package manager for tests.

    Every call is recorded in ``call_log`` as ``(operation, target)``.
    Calling ``install_cask``/``install_formula`` on a name that is not
    in the matching category fails, like the real tool would.
    """

    def __init__(
        self,
        casks: Iterable[str] = (),
        formulas: Iterable[str] = (),
        failing: Iterable[str] = (),
        available: bool = True,
        refresh_fails: bool = False,
        shellenv_output: str = "HOMEBREW_PREFIX=/opt/homebrew\nPATH=/opt/homebrew/bin:/usr/bin:/bin",
        shellenv_fails: bool = False,
        adapter_name: str = "mock",
    ):
        self._name = adapter_name
        self._casks = set(casks)
        self._formulas = set(formulas)
        self._failing = set(failing)
        self._available = available
        self._refresh_fails = refresh_fails
        self._shellenv_output = shellenv_output
        self._shellenv_fails = shellenv_fails
        self._call_log: list[tuple[str, str]] = []
        self._installed: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[tuple[str, str]]:
        """All ``(operation, target)`` pairs this mock has received."""
        return self._call_log

    def calls(self, operation: str) -> list[str]:
        """Targets of every call to ``operation``, in order."""
        return [target for op, target in self._call_log if op == operation]

    @property
    def installed(self) -> list[str]:
        """Packages whose install succeeded, in order."""
        return list(self._installed)

    def set_available(self, available: bool) -> None:
        """Flip availability (e.g. after a simulated bootstrap)."""
        self._available = available

    def is_available(self) -> bool:
        self._call_log.append(("is-available", ""))
        return self._available

    def is_cask(self, package: str) -> bool:
        self._call_log.append(("info-cask", package))
        return package in self._casks

    def is_formula(self, package: str) -> bool:
        self._call_log.append(("info-formula", package))
        return package in self._formulas

    def install_cask(self, package: str) -> Receipt:
        return self._install("install-cask", package, package in self._casks)

    def install_formula(self, package: str) -> Receipt:
        return self._install("install-formula", package, package in self._formulas)

    def _install(self, operation: str, package: str, known: bool) -> Receipt:
        self._call_log.append((operation, package))
        if not known or package in self._failing:
            return Receipt.failure(
                adapter=self._name,
                operation=operation,
                target=package,
                error=f"[mock] install of {package} failed",
                return_code=1,
            )
        self._installed.append(package)
        return Receipt.success(
            adapter=self._name,
            operation=operation,
            target=package,
            output=f"[mock] installed {package}",
            return_code=0,
        )

    def refresh_index(self) -> Receipt:
        self._call_log.append(("refresh-index", ""))
        if self._refresh_fails:
            return Receipt.failure(
                adapter=self._name,
                operation="refresh-index",
                error="[mock] update failed",
                return_code=1,
            )
        return Receipt.success(adapter=self._name, operation="refresh-index", return_code=0)

    def shellenv(self, binary_path: str) -> Receipt:
        self._call_log.append(("shellenv", binary_path))
        if self._shellenv_fails:
            return Receipt.failure(
                adapter=self._name,
                operation="shellenv",
                target=binary_path,
                error=f"[mock] {binary_path}: No such file or directory",
                return_code=127,
            )
        return Receipt.success(
            adapter=self._name,
            operation="shellenv",
            target=binary_path,
            output=self._shellenv_output,
            return_code=0,
        )

    def use_binary(self, binary_path: str) -> None:
        self._call_log.append(("use-binary", binary_path))

    def reset(self) -> None:
        """Clear the call log."""
        self._call_log.clear()
        self._installed.clear()
