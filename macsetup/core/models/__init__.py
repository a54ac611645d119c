"""
Domain models — Pydantic types for the setup tool.

All models are re-exported here for convenient access:

    from macsetup.core.models import Receipt, PackageResult, PassReport
"""

from macsetup.core.models.config import SetupConfig
from macsetup.core.models.outcome import InstallOutcome, PackageResult, PassReport
from macsetup.core.models.receipt import Receipt

__all__ = [
    "InstallOutcome",
    "PackageResult",
    "PassReport",
    "Receipt",
    "SetupConfig",
]
