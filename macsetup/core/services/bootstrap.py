"""
Bootstrap — install Homebrew on a machine that doesn't have it.

Two fatal steps, each attempted exactly once:

1. ``install_homebrew`` — fetch and run the official installer script.
2. ``setup_path`` — persist ``eval "$(<brew> shellenv)"`` in the shell
   profile and apply the same environment to this process so the
   install pass can find ``brew`` right away.
"""

from __future__ import annotations

import logging
import os
import platform
import re
from collections.abc import Mapping
from pathlib import Path

from macsetup.adapters.base import PackageManager
from macsetup.adapters.shell import run_command
from macsetup.core.data import (
    BREW_PATH_ARM64,
    BREW_PATH_DEFAULT,
    DEFAULT_PROFILE,
    HOMEBREW_INSTALL_URL,
)
from macsetup.core.errors import BootstrapFailure, PathSetupFailure

logger = logging.getLogger(__name__)

# One variable per line of `env` output
_ENV_LINE_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)=(.*)$")

# Maintained by the shell itself, not by shellenv
_SHELL_VARS = frozenset({"_", "PWD", "OLDPWD", "SHLVL"})


# ── Environment probes ──────────────────────────────────────────


def detect_arch() -> str:
    """Host CPU architecture as reported by ``uname -m``."""
    return platform.machine()


def brew_path_for_arch(arch: str) -> str:
    """Fixed Homebrew binary location for the given architecture."""
    if arch == "arm64":
        return BREW_PATH_ARM64
    return BREW_PATH_DEFAULT


def profile_path(profile: str = DEFAULT_PROFILE) -> Path:
    """Shell profile file under ``$HOME``.

    Raises:
        PathSetupFailure: If ``HOME`` is not set.
    """
    home = os.environ.get("HOME")
    if not home:
        raise PathSetupFailure("HOME is not set; cannot locate the shell profile.")
    return Path(home) / profile


def shellenv_line(brew_path: str) -> str:
    """The profile line that puts Homebrew on PATH for new shells."""
    return f'eval "$({brew_path} shellenv)"'


def parse_env(output: str) -> dict[str, str]:
    """Parse ``env`` output (``NAME=value`` per line) into a dict.

    A line that doesn't start with ``NAME=`` continues the previous
    value (multi-line values).
    """
    env: dict[str, str] = {}
    name: str | None = None
    for line in output.splitlines():
        m = _ENV_LINE_RE.match(line)
        if m:
            name = m.group(1)
            env[name] = m.group(2)
        elif name is not None:
            env[name] += "\n" + line
    return env


def env_changes(after: Mapping[str, str], before: Mapping[str, str]) -> dict[str, str]:
    """Variables the shellenv set or changed, minus the shell's own bookkeeping."""
    return {
        key: value
        for key, value in after.items()
        if key not in _SHELL_VARS and before.get(key) != value
    }


# ── Bootstrap steps ─────────────────────────────────────────────


def install_homebrew(
    script_url: str = HOMEBREW_INSTALL_URL,
    *,
    stdout_to_stderr: bool = False,
) -> None:
    """Fetch and run the Homebrew installer script.

    Args:
        script_url: Installer script location.
        stdout_to_stderr: Stream the installer's output to stderr.

    Raises:
        BootstrapFailure: If the fetch fails or the installer exits non-zero.
    """
    logger.info("Fetching Homebrew installer from %s", script_url)
    fetched = run_command(
        ["curl", "-fsSL", script_url],
        adapter="bootstrap",
        operation="fetch-installer",
        target=script_url,
    )
    if fetched.failed or not fetched.output:
        raise BootstrapFailure(
            "Failed to install Homebrew. Please check your internet connection "
            f"and try again. ({fetched.error or 'empty installer script'})"
        )

    # Same as: /bin/bash -c "$(curl -fsSL <url>)"
    receipt = run_command(
        ["/bin/bash", "-c", fetched.output],
        adapter="bootstrap",
        operation="install-homebrew",
        target=script_url,
        stream=True,
        stdout_to_stderr=stdout_to_stderr,
    )
    if receipt.failed:
        raise BootstrapFailure(
            "Failed to install Homebrew. Please check your internet connection "
            f"and try again. ({receipt.error})"
        )


def setup_path(
    manager: PackageManager,
    brew_path: str,
    profile_file: Path,
) -> dict[str, str]:
    """Persist and apply the Homebrew shell environment.

    The profile gets ``eval "$(<brew_path> shellenv)"`` for new shells.
    For this process, the manager evaluates the same line in a shell;
    every variable it set or changed is copied into ``os.environ`` and
    the manager is pointed at ``brew_path``.

    Args:
        manager: Package manager used to apply the shellenv.
        brew_path: Fixed location of the freshly installed binary.
        profile_file: Shell profile to append to (created if missing).

    Returns:
        The environment variables applied to ``os.environ``.

    Raises:
        PathSetupFailure: If the profile can't be written or shellenv fails.
    """
    try:
        with profile_file.open("a", encoding="utf-8") as f:
            f.write("\n")
            f.write(shellenv_line(brew_path) + "\n")
    except OSError as e:
        raise PathSetupFailure(f"Failed to write to {profile_file}: {e}") from e
    logger.info("Appended Homebrew shellenv to %s", profile_file)

    receipt = manager.shellenv(brew_path)
    if receipt.failed:
        raise PathSetupFailure(
            f"Failed to set up PATH: {brew_path} shellenv failed ({receipt.error})"
        )

    env = env_changes(parse_env(receipt.output), os.environ)
    os.environ.update(env)
    manager.use_binary(brew_path)
    logger.info("PATH has been set to include Homebrew (%d variables)", len(env))
    return env
