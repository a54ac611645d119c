"""
Shared test fixtures and configuration.
"""

import os
from pathlib import Path

import pytest

from macsetup.core.persistence.failure_log import FailureLogger


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch) -> dict:
    """Private copy of os.environ with HOME pointing into tmp_path.

    ``setup_path`` writes shellenv variables into os.environ; the copy
    keeps them from leaking between tests.
    """
    env = dict(os.environ)
    monkeypatch.setattr(os, "environ", env)
    home = tmp_path / "home"
    home.mkdir()
    env["HOME"] = str(home)
    return env


@pytest.fixture
def failure_log(tmp_path: Path) -> FailureLogger:
    """Failure logger writing into a temp working directory."""
    return FailureLogger(working_dir=tmp_path)
