"""
Install outcome models — what happened to each package in a pass.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class InstallOutcome(str, Enum):
    """Per-package result of the install pass."""

    CASK_INSTALLED = "cask_installed"
    FORMULA_INSTALLED = "formula_installed"
    NOT_FOUND = "not_found"
    INSTALL_FAILED = "install_failed"


class PackageResult(BaseModel):
    """Outcome of one package in the list."""

    package: str
    outcome: InstallOutcome
    category: Literal["cask", "formula"] | None = None   # None when not found
    error: str | None = None
    logged: bool = False            # a failure-log record was written
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.outcome in (
            InstallOutcome.CASK_INSTALLED,
            InstallOutcome.FORMULA_INSTALLED,
        )

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


class PassReport(BaseModel):
    """Aggregate result of one install pass over the package list."""

    results: list[PackageResult] = Field(default_factory=list)

    def add(self, result: PackageResult) -> None:
        self.results.append(result)

    @property
    def success(self) -> bool:
        """True only if every package installed (vacuously true when empty)."""
        return all(r.ok for r in self.results)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    def by_outcome(self, outcome: InstallOutcome) -> list[PackageResult]:
        return [r for r in self.results if r.outcome == outcome]

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }
