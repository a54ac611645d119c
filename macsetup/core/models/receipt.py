"""
Receipt model — the result of one package-manager command.

Adapters return Receipts instead of raising. A failed ``brew install``
is an ordinary outcome of the install pass, not an exceptional one.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Outcome of a single external command.

    ``operation`` names what was asked of the adapter (``install-cask``,
    ``refresh-index``, ...) and ``target`` is the package or path it
    was asked about, if any.
    """

    adapter: str
    operation: str
    target: str = ""
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    return_code: int | None = None
    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the command succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command failed."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        adapter: str,
        operation: str,
        target: str = "",
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            adapter=adapter,
            operation=operation,
            target=target,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        operation: str,
        error: str,
        target: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            adapter=adapter,
            operation=operation,
            target=target,
            status="failed",
            error=error,
            **kwargs,
        )
