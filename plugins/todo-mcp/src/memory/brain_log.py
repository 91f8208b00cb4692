"""
Append-only memory log for to-do activity.

Each successful mutation appends one note to a JSONL file shared with the
host agent's memory store:

    {"id": "...", "kind": "note", "text": "TODO: added - Buy milk",
     "createdAt": "2024-06-15T09:30:00+00:00", "tags": ["todo"]}

Logging is fire-and-forget: write failures are reported through the
``logging`` module and never reach the caller.
"""

import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path

log = logging.getLogger(__name__)


class BrainLog:
    """Appends to-do notes to a JSONL memory file."""

    def __init__(self, store_path: Path) -> None:
        self._store_path = store_path
        self._lock = threading.Lock()

    @property
    def store_path(self) -> Path:
        return self._store_path

    def _entry(self, text: str) -> dict:
        return {
            "id": str(uuid.uuid4()),
            "kind": "note",
            "text": f"TODO: {text}",
            "createdAt": datetime.now(timezone.utc).isoformat(),
            "tags": ["todo"],
        }

    def log(self, text: str) -> None:
        line = json.dumps(self._entry(text), ensure_ascii=False)
        try:
            with self._lock:
                self._store_path.parent.mkdir(parents=True, exist_ok=True)
                with open(self._store_path, "a", encoding="utf-8") as f:
                    f.write(line + "\n")
        except OSError:
            log.warning("Brain log write failed: %s", self._store_path, exc_info=True)
