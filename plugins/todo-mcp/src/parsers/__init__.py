from .metadata import (
    clean_text,
    extract_due_date,
    extract_priority,
    extract_tags,
    is_due_today,
    is_overdue,
)
from .todo_parser import is_task_line, parse_todos
from .todo_editor import add_todo, edit_todo, mark_done, remove_todo

__all__ = [
    "clean_text",
    "extract_due_date",
    "extract_priority",
    "extract_tags",
    "is_due_today",
    "is_overdue",
    "is_task_line",
    "parse_todos",
    "add_todo",
    "edit_todo",
    "mark_done",
    "remove_todo",
]
