"""
Shell command runner — the single place ``subprocess.run`` is called.

Every external command (bootstrap script, brew queries, installs)
goes through ``run_command`` and comes back as a Receipt. There is
no timeout: a hung command hangs the run, same as in a terminal.

Streamed output can be sent to stderr instead of stdout, so that a
machine-readable document on stdout (``--json``) stays parseable.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime

from macsetup.core.models.receipt import Receipt

logger = logging.getLogger(__name__)

# Conventional shell exit status for "command not found"
EXIT_NOT_FOUND = 127

# File descriptor of this process's stderr
STDERR_FD = 2


def format_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def run_command(
    argv: Sequence[str],
    *,
    adapter: str,
    operation: str,
    target: str = "",
    stream: bool = False,
    stdout_to_stderr: bool = False,
    env: Mapping[str, str] | None = None,
) -> Receipt:
    """Run a command and capture the outcome as a Receipt.

    Args:
        argv: Command and arguments (no shell interpolation).
        adapter: Adapter name recorded on the receipt.
        operation: Operation name recorded on the receipt.
        target: Package or path the command is about.
        stream: If True, the child inherits stdout/stderr so the user
            sees progress (installs, updates). If False, output is
            captured into the receipt.
        stdout_to_stderr: With ``stream``, point the child's stdout at
            this process's stderr.
        env: Extra environment variables layered over ``os.environ``.

    Returns:
        Receipt with status 'ok' on exit 0, 'failed' otherwise.
        Never raises for a failing or missing command.
    """
    argv_list = list(argv)
    command = format_argv(argv_list)
    logger.debug("Executing: %s", command)
    started_at = _now_iso()
    start = time.monotonic()

    try:
        result = subprocess.run(
            argv_list,
            capture_output=not stream,
            stdout=STDERR_FD if (stream and stdout_to_stderr) else None,
            text=True,
            env=dict(os.environ, **(env or {})),
        )
    except OSError as e:
        return Receipt.failure(
            adapter=adapter,
            operation=operation,
            target=target,
            error=f"Cannot execute {argv_list[0]}: {e}",
            return_code=EXIT_NOT_FOUND,
            started_at=started_at,
            ended_at=_now_iso(),
            metadata={"command": command},
        )

    ended_at = _now_iso()
    elapsed_ms = int((time.monotonic() - start) * 1000)
    output = (result.stdout or "").strip()
    stderr = (result.stderr or "").strip()

    if stderr:
        logger.debug("STDERR %s", stderr)

    timing = {"started_at": started_at, "ended_at": ended_at, "duration_ms": elapsed_ms}

    if result.returncode == 0:
        return Receipt.success(
            adapter=adapter,
            operation=operation,
            target=target,
            output=output,
            return_code=0,
            metadata={"command": command},
            **timing,
        )

    return Receipt.failure(
        adapter=adapter,
        operation=operation,
        target=target,
        error=stderr or f"Command exited with code {result.returncode}",
        output=output,
        return_code=result.returncode,
        metadata={"command": command},
        **timing,
    )
