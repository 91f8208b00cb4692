"""
Query language for filtering to-do items.

A query is split on whitespace and each token is classified on its own:

    #dev        tag filter       (all tag filters must match)
    !high       priority filter  (any priority filter may match)
    @due        has a due date   ┐
    @overdue    due before today ├ due scope, the last one given wins
    @today      due today        ┘
    anything    free text        (tokens rejoined with single spaces,
                                  case-insensitive substring of item.text)

Unrecognised tokens are never an error; they are free text. Free text is
matched against the full item text, annotations included, so ``@due(2024``
finds items by the literal marker.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from models.todo import TodoItem
from parsers.metadata import is_due_today, is_overdue
from utils.dates import resolve_reference

_TAG_TOKEN_RE = re.compile(r"^#[\w-]+$")
_PRIORITY_TOKEN_RE = re.compile(r"^!(high|medium|low)$", re.IGNORECASE)

# Scope tokens → scope name
_SCOPE_TOKENS = {
    "@due": "any",
    "@overdue": "overdue",
    "@today": "today",
}


@dataclass
class Query:
    """A query string decomposed into its filters."""

    tags: List[str] = field(default_factory=list)
    priorities: List[str] = field(default_factory=list)
    due_scope: Optional[str] = None
    text: str = ""


def parse_query(query: str) -> Query:
    """Classify each whitespace-separated token of ``query``."""
    parsed = Query()
    text_parts: List[str] = []

    for token in query.split():
        if _TAG_TOKEN_RE.match(token):
            parsed.tags.append(token[1:].lower())
        elif _PRIORITY_TOKEN_RE.match(token):
            parsed.priorities.append(token[1:].lower())
        elif token.lower() in _SCOPE_TOKENS:
            parsed.due_scope = _SCOPE_TOKENS[token.lower()]
        else:
            text_parts.append(token)

    parsed.text = " ".join(text_parts).lower()
    return parsed


def _matches(item: TodoItem, query: Query, reference: str) -> bool:
    if query.tags and not all(tag in item.tags for tag in query.tags):
        return False
    if query.priorities and item.priority not in query.priorities:
        return False
    if query.text and query.text not in item.text.lower():
        return False

    if query.due_scope is not None:
        if item.due_date is None:
            return False
        if query.due_scope == "overdue" and not is_overdue(item.due_date, reference):
            return False
        if query.due_scope == "today" and not is_due_today(item.due_date, reference):
            return False

    return True


def search_todos(
    items: Iterable[TodoItem],
    query: str,
    reference_date: Optional[str] = None,
) -> List[TodoItem]:
    """
    Return the items matching every filter in ``query``, in input order.

    Args:
        items: Items to filter (typically the open items of one parse)
        query: Query string; empty or whitespace-only matches everything
        reference_date: YYYY-MM-DD used by @overdue/@today (default: today, UTC)
    """
    parsed = parse_query(query)
    reference = resolve_reference(reference_date)
    return [item for item in items if _matches(item, parsed, reference)]
