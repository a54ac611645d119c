"""
Failure log — append-only record of cask installs that failed.

A flat text file in the working directory. The first line is a fixed
header written when the file is created; every record after that is
``YYYY-MM-DD HH:MM:SS - <package>`` in local time.

The file is opened for append only. It is never truncated, rotated,
or deleted, so repeated failing runs keep adding lines. Nothing is
written until the first failure, so a clean run leaves no file behind.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from macsetup.core.data import DEFAULT_LOG_FILE

logger = logging.getLogger(__name__)

LOG_HEADER = "This is the log of errors that occurred during the script execution."
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class FailureLogger:
    """Append failure records to the log file.

    Write errors (read-only filesystem, permissions) are not caught:
    the ``OSError`` propagates to the caller.
    """

    def __init__(self, path: Path | None = None, working_dir: Path | None = None):
        if path is not None:
            self._path = path
        else:
            self._path = (working_dir or Path.cwd()) / DEFAULT_LOG_FILE

    @property
    def path(self) -> Path:
        return self._path

    def record(self, package: str, when: datetime | None = None) -> str:
        """Append one record for ``package``.

        Returns:
            The line written (without trailing newline).
        """
        if not self._path.is_file():
            logger.info("Failure log does not exist, creating %s", self._path)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(LOG_HEADER + "\n")
        else:
            logger.debug("Failure log exists, appending to %s", self._path)

        stamp = (when or datetime.now()).strftime(TIMESTAMP_FORMAT)
        line = f"{stamp} - {package}"
        with self._path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
        return line

    def entries(self) -> list[tuple[str, str]]:
        """Read back ``(timestamp, package)`` records, oldest first.

        The header and any line that doesn't look like a record are
        skipped.
        """
        if not self._path.is_file():
            return []

        records: list[tuple[str, str]] = []
        with self._path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.rstrip("\n")
                stamp, sep, package = line.partition(" - ")
                if not sep or not package:
                    continue
                try:
                    datetime.strptime(stamp, TIMESTAMP_FORMAT)
                except ValueError:
                    continue
                records.append((stamp, package))
        return records

    def entry_count(self) -> int:
        return len(self.entries())
