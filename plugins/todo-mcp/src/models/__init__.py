from .todo import PRIORITIES, Priority, TodoItem

__all__ = [
    "PRIORITIES",
    "Priority",
    "TodoItem",
]
