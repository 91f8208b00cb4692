"""
Parser for TODO.md documents.

Main API:
    parse_todos(document)  → List[TodoItem]

A document is any markdown text. Only lines matching the checkbox grammar

    ^\\s*-\\s*\\[( |x|X)\\]\\s*(.+)$

become items; headings, prose, plain bullets and malformed checkboxes are
left alone. Each item remembers its zero-based line number so that
parsers.todo_editor can rewrite exactly that line later.
"""

import re
from typing import List, Optional

from models.todo import TodoItem
from parsers.metadata import extract_due_date, extract_priority, extract_tags

TASK_LINE_RE = re.compile(r"^\s*-\s*\[([ xX])\]\s*(.+)$")


def split_lines(document: str) -> List[str]:
    """Split on ``\\n`` only; ``"\\n".join`` restores the document exactly."""
    return document.split("\n")


def is_task_line(line: str) -> bool:
    return TASK_LINE_RE.match(line) is not None


def parse_task_line(line: str, line_no: int) -> Optional[TodoItem]:
    """Return a TodoItem for a task line, or None if the line is not one."""
    m = TASK_LINE_RE.match(line)
    if not m:
        return None

    text = m.group(2).strip()
    return TodoItem(
        line_no=line_no,
        raw=line,
        done=m.group(1).lower() == "x",
        text=text,
        tags=tuple(extract_tags(text)),
        priority=extract_priority(text),
        due_date=extract_due_date(text),
    )


def parse_todos(document: str) -> List[TodoItem]:
    """
    Parse every task line of a document, in document order.

    Args:
        document: Full document text

    Returns:
        TodoItems whose ``line_no`` indexes ``split_lines(document)``
    """
    items: List[TodoItem] = []
    for line_no, line in enumerate(split_lines(document)):
        item = parse_task_line(line, line_no)
        if item is not None:
            items.append(item)
    return items
