"""
Fatal setup errors.

These abort a run before (or instead of) the install pass. Per-package
problems are never raised; they are recorded in ``PackageResult``.
"""

from __future__ import annotations


class SetupError(Exception):
    """Base class for errors that abort the run with exit status 1."""

    kind = "setup"


class BootstrapFailure(SetupError):
    """The Homebrew installer script could not be run or exited non-zero."""

    kind = "bootstrap"


class PathSetupFailure(SetupError):
    """The shell profile could not be updated or ``brew shellenv`` failed."""

    kind = "path_setup"


class IndexRefreshFailure(SetupError):
    """``brew update`` exited non-zero."""

    kind = "index_refresh"
