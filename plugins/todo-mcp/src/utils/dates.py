"""
Reference-date helpers.

All due dates are compared as ISO 8601 strings (YYYY-MM-DD), where lexical
order equals calendar order, so the only thing needed here is "today".
"""

from datetime import datetime, timezone
from typing import Optional


def today_iso() -> str:
    """Return the current UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


def resolve_reference(reference_date: Optional[str] = None) -> str:
    """Return ``reference_date`` or, when omitted, today's UTC date."""
    return reference_date if reference_date else today_iso()
