"""Adapters — package-manager bindings.

Public re-exports for convenient access.
"""

from macsetup.adapters.base import PackageManager
from macsetup.adapters.homebrew import HomebrewAdapter
from macsetup.adapters.mock import MockPackageManager

__all__ = [
    "HomebrewAdapter",
    "MockPackageManager",
    "PackageManager",
]
