"""
Line-stable mutations of a TODO document.

Every function takes the full document text and returns the new full text
with exactly one line changed, inserted or removed. Items are located by
``item.line_no`` alone, never by searching for their text, so duplicate
lines are handled correctly. The flip side is that the item must come from
a parse of this exact document (callers re-parse after each structural
edit; store.todo_store.TodoStore.commit rejects stale snapshots).

Rewritten lines always use the canonical ``- [ ]`` / ``- [x]`` prefix at
column zero, even when the original line was indented.
"""

import re
from typing import List, Optional

from models.todo import TodoItem
from parsers.todo_parser import is_task_line, split_lines

_OPEN_MARKER_RE = re.compile(r"^\s*-\s*\[ \]")
_CHECKBOX_PREFIX_RE = re.compile(r"^\s*-\s*\[([ xX])\]")


def _line_ending(line: str) -> str:
    """Carriage return left over from a CRLF document, if any."""
    return "\r" if line.endswith("\r") else ""


def _first_line(text: str) -> str:
    """Cut ``text`` at its first line break so it stays on one bullet."""
    return text.split("\n", 1)[0].rstrip("\r")


def mark_done(document: str, item: TodoItem) -> str:
    """Tick the checkbox on ``item.line_no``. Already-done lines are unchanged."""
    lines = split_lines(document)
    lines[item.line_no] = _OPEN_MARKER_RE.sub("- [x]", lines[item.line_no], count=1)
    return "\n".join(lines)


def edit_todo(document: str, item: TodoItem, new_text: str) -> str:
    """
    Replace the text of ``item.line_no``, keeping its checkbox state.

    ``new_text`` is written verbatim up to its first line break; anything
    after it is dropped. Its annotations are picked up on the next parse.
    """
    lines = split_lines(document)
    line = lines[item.line_no]
    m = _CHECKBOX_PREFIX_RE.match(line)
    if m:
        state = "x" if m.group(1).lower() == "x" else " "
        lines[item.line_no] = f"- [{state}] {_first_line(new_text)}{_line_ending(line)}"
    return "\n".join(lines)


def remove_todo(document: str, item: TodoItem) -> str:
    """Delete ``item.line_no``; every later line moves up by one."""
    lines = split_lines(document)
    del lines[item.line_no]
    return "\n".join(lines)


def _find_section(lines: List[str], section_header: str) -> Optional[int]:
    needle = section_header.lower()
    for i, line in enumerate(lines):
        if needle in line.lower():
            return i
    return None


def _find_last_task(lines: List[str]) -> Optional[int]:
    for i in range(len(lines) - 1, -1, -1):
        if is_task_line(lines[i]):
            return i
    return None


def add_todo(document: str, text: str, section_header: Optional[str] = None) -> str:
    """
    Insert a new open bullet ``- [ ] {text}``.

    Insertion point, first match wins:
        1. Below the first line containing ``section_header``
           (case-insensitive), past any blank lines directly under it.
        2. Below the last task line in the document.
        3. Appended at the end.

    Blank-line skipping stops at the final line segment, so a document
    ending in a newline keeps that newline after the new bullet. In a CRLF
    document every line before the last keeps a trailing ``\\r``. As with
    edit_todo, ``text`` is cut at its first line break.
    """
    lines = split_lines(document)
    bullet = f"- [ ] {_first_line(text)}"
    eol = "\r" if "\r\n" in document else ""

    insert_at: Optional[int] = None
    if section_header:
        header_idx = _find_section(lines, section_header)
        if header_idx is not None:
            insert_at = header_idx + 1
            last = len(lines) - 1
            while insert_at < last and not lines[insert_at].strip():
                insert_at += 1

    if insert_at is None:
        last_task = _find_last_task(lines)
        if last_task is not None:
            insert_at = last_task + 1

    if insert_at is None:
        insert_at = len(lines)
    lines.insert(insert_at, bullet)

    if eol:
        if insert_at < len(lines) - 1:
            lines[insert_at] += eol
        elif insert_at > 0 and not lines[insert_at - 1].endswith(eol):
            lines[insert_at - 1] += eol
    return "\n".join(lines)
