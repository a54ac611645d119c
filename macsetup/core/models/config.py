"""
Setup configuration model — what one run installs and where it writes.

Loaded from macsetup.yml when present; every field has a default so
an absent file means "the built-in list, the usual places".
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator

from macsetup.core.data import (
    DEFAULT_LOG_FILE,
    DEFAULT_PACKAGES,
    DEFAULT_PROFILE,
    HOMEBREW_INSTALL_URL,
)

logger = logging.getLogger(__name__)


class SetupConfig(BaseModel):
    """Inputs for a setup run."""

    packages: list[str] = Field(default_factory=lambda: list(DEFAULT_PACKAGES))
    log_file: str = DEFAULT_LOG_FILE        # relative to the working directory
    profile: str = DEFAULT_PROFILE          # relative to $HOME
    install_script_url: str = HOMEBREW_INSTALL_URL

    @field_validator("packages")
    @classmethod
    def _clean_packages(cls, value: list[str]) -> list[str]:
        cleaned: list[str] = []
        for i, name in enumerate(value):
            name = str(name).strip()
            if not name:
                raise ValueError(f"packages[{i}] is empty")
            cleaned.append(name)

        # Duplicates are harmless (the second install is a no-op) but wasteful
        seen: set[str] = set()
        for name in cleaned:
            if name in seen:
                logger.warning("Package listed more than once: %s", name)
            seen.add(name)
        return cleaned

    @field_validator("log_file", "profile")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value
