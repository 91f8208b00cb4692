"""
Human-readable rendering of to-do items for list and search output.

    1. [HIGH] (OVERDUE: 2024-06-01) Fix login #dev !high @due(2024-06-01)
    2. (Due today) Call dentist @due(2024-06-15)
    3. Buy milk
"""

from typing import Iterable, List

from models.todo import TodoItem
from parsers.metadata import is_due_today, is_overdue


def due_label(item: TodoItem, today: str) -> str:
    """Return the due-date label with a trailing space, or '' if undated."""
    if not item.due_date:
        return ""
    if is_overdue(item.due_date, today):
        return f"(OVERDUE: {item.due_date}) "
    if is_due_today(item.due_date, today):
        return "(Due today) "
    return f"(Due: {item.due_date}) "


def format_todo_line(item: TodoItem, idx: int, today: str) -> str:
    """Render one item as a numbered line; ``idx`` is zero-based."""
    pri = f"[{item.priority.upper()}] " if item.priority else ""
    return f"{idx + 1}. {pri}{due_label(item, today)}{item.text}"


def format_todo_lines(items: Iterable[TodoItem], today: str) -> List[str]:
    return [format_todo_line(item, idx, today) for idx, item in enumerate(items)]
