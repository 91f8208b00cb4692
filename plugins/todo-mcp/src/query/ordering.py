"""Due-date ordering: overdue, due today, upcoming, then undated."""

from typing import Iterable, List, Optional, Tuple

from models.todo import TodoItem
from parsers.metadata import is_due_today, is_overdue
from utils.dates import resolve_reference

OVERDUE, DUE_TODAY, UPCOMING, UNDATED = range(4)


def due_bucket(item: TodoItem, reference: str) -> int:
    if item.due_date is None:
        return UNDATED
    if is_overdue(item.due_date, reference):
        return OVERDUE
    if is_due_today(item.due_date, reference):
        return DUE_TODAY
    return UPCOMING


def sort_by_due_date(
    items: Iterable[TodoItem],
    reference_date: Optional[str] = None,
) -> List[TodoItem]:
    """
    Return a new list ordered by due bucket, then by date (earliest first).

    The sort is stable, so undated items keep their input order.
    """
    reference = resolve_reference(reference_date)

    def key(item: TodoItem) -> Tuple[int, str]:
        return due_bucket(item, reference), item.due_date or ""

    return sorted(items, key=key)
