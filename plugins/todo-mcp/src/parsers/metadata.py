"""
Inline metadata extraction for to-do text.

Three annotations may appear anywhere in a task's text, in any order:

    #tag              one or more word characters or hyphens
    !high             priority: high, medium or low (case-insensitive)
    @due(2024-06-01)  due date, exact YYYY-MM-DD shape

Extraction never strips the annotations from the item text; clean_text()
produces the display form without them.
"""

import re
from typing import List, Optional

from utils.dates import resolve_reference

# Leading whitespace is part of the match so removal does not leave a gap.
PRIORITY_RE = re.compile(r"\s*!(high|medium|low)\b", re.IGNORECASE)
TAG_RE = re.compile(r"#([\w-]+)")
# Shape check only: 2024-13-40 is accepted.
DUE_DATE_RE = re.compile(r"@due\(([0-9]{4}-[0-9]{2}-[0-9]{2})\)", re.IGNORECASE)

_WHITESPACE_RUN_RE = re.compile(r"\s{2,}")


def extract_tags(text: str) -> List[str]:
    """Return lowercase tags in first-seen order, without duplicates."""
    tags: List[str] = []
    for m in TAG_RE.finditer(text):
        tag = m.group(1).lower()
        if tag not in tags:
            tags.append(tag)
    return tags


def extract_priority(text: str) -> Optional[str]:
    """Return the first priority marker, lowercased. Later markers are ignored."""
    m = PRIORITY_RE.search(text)
    return m.group(1).lower() if m else None


def extract_due_date(text: str) -> Optional[str]:
    """Return the date of the first ``@due(YYYY-MM-DD)`` annotation, if any."""
    m = DUE_DATE_RE.search(text)
    return m.group(1) if m else None


def _strip_markers(text: str) -> str:
    text = PRIORITY_RE.sub("", text)
    text = TAG_RE.sub("", text)
    return DUE_DATE_RE.sub("", text)


def clean_text(text: str) -> str:
    """
    Remove every priority, tag and due-date marker, then normalise spacing.

    Removing one marker can splice its neighbours into a new one
    (``@due#x(2024-01-01)`` becomes ``@due(2024-01-01)`` once ``#x`` is gone),
    so removal repeats until the text is stable.
    """
    previous = None
    while previous != text:
        previous = text
        text = _strip_markers(text)
    return _WHITESPACE_RUN_RE.sub(" ", text).strip()


def is_overdue(due_date: str, reference_date: Optional[str] = None) -> bool:
    """True if ``due_date`` is strictly before the reference date (default: today, UTC)."""
    return due_date < resolve_reference(reference_date)


def is_due_today(due_date: str, reference_date: Optional[str] = None) -> bool:
    """True if ``due_date`` equals the reference date (default: today, UTC)."""
    return due_date == resolve_reference(reference_date)
