"""
File-backed storage for the TODO document.

Design:
    The file on disk is the only copy of the document. Callers read a
    snapshot, parse and mutate it in memory, then hand both the snapshot and
    the new text to commit(). commit() re-reads the file under the lock and
    refuses to write if it no longer equals the snapshot, because the
    line numbers the mutation was computed from would point at the wrong
    lines.

All reads and writes acquire _lock (threading.RLock), shared by the MCP
transport and the REST API thread.
"""

import hashlib
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)

DEFAULT_TODO_TEMPLATE = """# TODO

- [ ] My first task
"""


class StaleSnapshotError(Exception):
    """The TODO file changed between reading a snapshot and committing."""


def snapshot_id(content: str) -> str:
    """Short content hash identifying a document snapshot."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:12]


def _atomic_write(target_path: Path, content: str) -> None:
    temp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", newline="", dir=target_path.parent, delete=False
        ) as temp_file:
            temp_path = Path(temp_file.name)
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_path, target_path)
    finally:
        if temp_path is not None and temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                log.warning("Could not remove temp file %s", temp_path)


class TodoStore:
    """
    Thread-safe access to one TODO markdown file.

    Usage:
        store = TodoStore(Path("~/TODO.md").expanduser())
        snapshot = store.read()
        store.commit(snapshot, mark_done(snapshot, item))
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def ensure_exists(self) -> bool:
        """
        Create the file from DEFAULT_TODO_TEMPLATE if it is missing.

        Returns:
            True if the file was created
        """
        with self._lock:
            if self._file_path.exists():
                return False
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            _atomic_write(self._file_path, DEFAULT_TODO_TEMPLATE)
            log.info("Created %s from default template", self._file_path)
            return True

    def _read_raw(self) -> str:
        # newline="" keeps CRLF line endings intact
        with open(self._file_path, "r", encoding="utf-8", newline="") as f:
            return f.read()

    def read(self) -> str:
        """Return the current document, bootstrapping it first if missing."""
        with self._lock:
            self.ensure_exists()
            return self._read_raw()

    def commit(self, snapshot: str, content: str) -> None:
        """
        Write ``content`` if the file still holds ``snapshot``.

        Raises:
            StaleSnapshotError: the file was modified after ``snapshot`` was read
        """
        with self._lock:
            current = self._read_raw() if self._file_path.exists() else None
            if current != snapshot:
                raise StaleSnapshotError(
                    f"{self._file_path} changed since snapshot {snapshot_id(snapshot)}"
                )
            _atomic_write(self._file_path, content)
            log.info(
                "Wrote %s (snapshot %s -> %s)",
                self._file_path,
                snapshot_id(snapshot),
                snapshot_id(content),
            )
