"""
Package-manager base — the capability contract between installer and tool.

The install pass only talks to a package manager through this
interface, never directly to ``brew``. Tests substitute
``MockPackageManager``; production uses ``HomebrewAdapter``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from macsetup.core.models.receipt import Receipt


class PackageManager(ABC):
    """Abstract base class for package managers.

    Commands that fail are reported through the returned Receipt (or
    ``False`` for the classification queries). Implementations MUST
    NOT raise for a non-zero exit status.

    To add a new package manager:
        1. Subclass PackageManager
        2. Implement every abstract method below
        3. Pass an instance to ``run_setup``
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'brew', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the package-manager binary is resolvable on PATH.

        Should be fast and never raise.
        """

    @abstractmethod
    def is_cask(self, package: str) -> bool:
        """Whether ``package`` is known as a cask (GUI / prebuilt binary)."""

    @abstractmethod
    def is_formula(self, package: str) -> bool:
        """Whether ``package`` is known as a formula (CLI tool / library)."""

    @abstractmethod
    def install_cask(self, package: str) -> Receipt:
        """Install ``package`` as a cask."""

    @abstractmethod
    def install_formula(self, package: str) -> Receipt:
        """Install ``package`` as a formula."""

    @abstractmethod
    def refresh_index(self) -> Receipt:
        """Refresh the local package index."""

    @abstractmethod
    def shellenv(self, binary_path: str) -> Receipt:
        """Apply the shell environment setup of the binary at ``binary_path``.

        On success, ``Receipt.output`` is the resulting environment as
        ``env`` prints it: one ``NAME=value`` per line.
        """

    def use_binary(self, binary_path: str) -> None:
        """Run later commands through the binary at ``binary_path``.

        Called after a bootstrap. The default does nothing.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
