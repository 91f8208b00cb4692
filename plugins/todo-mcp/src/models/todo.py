"""
Core to-do data model.

A TodoItem is a read-only view of one checkbox line in a TODO.md snapshot.
Unlike a tree model there is no serializer: the document text stays the
source of truth and mutations rewrite single lines by ``line_no`` (see
parsers.todo_editor).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

Priority = Literal["high", "medium", "low"]

PRIORITIES: Tuple[str, ...] = ("high", "medium", "low")


@dataclass(frozen=True)
class TodoItem:
    """
    A single checkbox line parsed from a TODO document.

    ``line_no`` is only meaningful against the exact document snapshot the
    item was parsed from. Any insert or delete above it shifts the line, so
    re-parse before issuing another mutation.

    ``tags``, ``priority`` and ``due_date`` are derived from ``text``, which
    still contains the annotations they were extracted from.
    """

    line_no: int
    raw: str
    done: bool
    text: str
    tags: Tuple[str, ...] = ()
    priority: Optional[Priority] = None
    due_date: Optional[str] = None

    @property
    def status(self) -> str:
        return "done" if self.done else "open"
