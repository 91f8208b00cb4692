"""
To-do command handlers shared by MCP tools and the REST API.

Each handler reads a fresh snapshot from the store, validates the request
against it, applies at most one mutation and returns a JSON-serializable
dict. Failures are returned, not raised:

    {"error": "No open TODO at index 4.", "code": "not_found"}

Indices are 1-based positions in the todo-list ordering (open items sorted
by due date), so a number read off a listing can be passed straight back.
"""

import logging
from typing import List, Optional, Tuple, Union

from memory.brain_log import BrainLog
from models.todo import TodoItem
from parsers.metadata import is_overdue
from parsers.todo_editor import add_todo, edit_todo, mark_done, remove_todo
from parsers.todo_parser import parse_todos
from query.ordering import sort_by_due_date
from query.search import search_todos
from store.todo_store import StaleSnapshotError, TodoStore
from utils.dates import resolve_reference
from utils.formatting import format_todo_lines

log = logging.getLogger(__name__)

ADD_USAGE = "Usage: /todo-add <text> (supports @due(YYYY-MM-DD), #tag, !priority)"
DONE_USAGE = "Usage: /todo-done <index> (see /todo-list)"
EDIT_USAGE = "Usage: /todo-edit <index> <new text> (see /todo-list)"
REMOVE_USAGE = "Usage: /todo-remove <index> (see /todo-list)"
SEARCH_USAGE = (
    "Usage: /todo-search <query> (supports text, #tag, !priority, @due, @overdue, @today)"
)


def _error(message: str, code: str) -> dict:
    return {"error": message, "code": code}


def _todo_to_dict(item: TodoItem, today: str, index: Optional[int] = None) -> dict:
    """Serialize a TodoItem to a JSON-serializable dict."""
    d = {
        "text": item.text,
        "done": item.done,
        "tags": list(item.tags),
        "priority": item.priority,
        "due_date": item.due_date,
        "overdue": bool(item.due_date and is_overdue(item.due_date, today)),
        "line_no": item.line_no,
    }
    if index is not None:
        d["index"] = index
    return d


def _open_items(document: str, today: str) -> List[TodoItem]:
    """Open items in todo-list order."""
    return sort_by_due_date([t for t in parse_todos(document) if not t.done], today)


def _is_single_line(text: str) -> bool:
    return "\n" not in text and "\r" not in text


def _brain_log(brain: Optional[BrainLog], text: str) -> None:
    if brain is None:
        return
    try:
        brain.log(text)
    except Exception:
        log.exception("Brain log failed for %r", text)


def _resolve(
    store: TodoStore, index: int, today: str, usage: str
) -> Union[dict, Tuple[str, TodoItem]]:
    """Return (snapshot, item) for an open index, or an error dict."""
    if index < 1:
        return _error(usage, "usage")
    snapshot = store.read()
    open_items = _open_items(snapshot, today)
    if index > len(open_items):
        return _error(f"No open TODO at index {index}.", "not_found")
    return snapshot, open_items[index - 1]


def _commit(store: TodoStore, snapshot: str, content: str) -> Optional[dict]:
    try:
        store.commit(snapshot, content)
    except StaleSnapshotError as e:
        log.warning("Rejected stale write: %s", e)
        return _error(f"{store.file_path.name} changed while editing; list again and retry.", "conflict")
    return None


# ---------------------------------------------------------------------------
# Read-only handlers
# ---------------------------------------------------------------------------


def handle_todo_list(store: TodoStore, *, limit: int = 30, today: Optional[str] = None) -> dict:
    today = resolve_reference(today)
    todos = _open_items(store.read(), today)
    top = todos[:limit]

    if top:
        message = f"Open TODOs ({len(todos)}):\n" + "\n".join(format_todo_lines(top, today))
    else:
        message = "No open TODOs."

    return {
        "message": message,
        "open_count": len(todos),
        "todos": [_todo_to_dict(t, today, idx) for idx, t in enumerate(top, start=1)],
    }


def handle_todo_search(
    store: TodoStore,
    *,
    query: str,
    limit: int = 30,
    today: Optional[str] = None,
) -> dict:
    query = query.strip()
    if not query:
        return _error(SEARCH_USAGE, "usage")

    today = resolve_reference(today)
    open_items = [t for t in parse_todos(store.read()) if not t.done]
    matches = sort_by_due_date(search_todos(open_items, query, today), today)
    top = matches[:limit]

    if top:
        message = f'Search results for "{query}" ({len(matches)}):\n' + "\n".join(
            format_todo_lines(top, today)
        )
    else:
        message = f'No open TODOs matching "{query}".'

    return {
        "message": message,
        "query": query,
        "match_count": len(matches),
        "todos": [_todo_to_dict(t, today) for t in top],
    }


def handle_todo_status(
    store: TodoStore,
    *,
    limit: int = 50,
    overdue: bool = False,
    today: Optional[str] = None,
) -> dict:
    today = resolve_reference(today)
    all_items = parse_todos(store.read())

    open_items = [t for t in all_items if not t.done]
    overdue_items = [t for t in open_items if t.due_date and is_overdue(t.due_date, today)]
    if overdue:
        open_items = overdue_items

    return {
        "todo_file": str(store.file_path),
        "open_count": len(open_items),
        "done_count": sum(1 for t in all_items if t.done),
        "overdue_count": len(overdue_items),
        "open": [_todo_to_dict(t, today) for t in sort_by_due_date(open_items, today)[:limit]],
        "tags": sorted({tag for t in open_items for tag in t.tags}),
    }


# ---------------------------------------------------------------------------
# Mutating handlers
# ---------------------------------------------------------------------------


def handle_todo_add(
    store: TodoStore,
    brain: Optional[BrainLog] = None,
    *,
    text: str,
    section_header: Optional[str] = None,
) -> dict:
    text = text.strip()
    if not text or not _is_single_line(text):
        return _error(ADD_USAGE, "usage")

    snapshot = store.read()
    err = _commit(store, snapshot, add_todo(snapshot, text, section_header))
    if err:
        return err

    log.info("Added TODO: %s", text)
    _brain_log(brain, f"added - {text}")
    return {"message": f"Added TODO: {text}", "text": text}


def handle_todo_done(
    store: TodoStore,
    brain: Optional[BrainLog] = None,
    *,
    index: int,
    today: Optional[str] = None,
) -> dict:
    resolved = _resolve(store, index, resolve_reference(today), DONE_USAGE)
    if isinstance(resolved, dict):
        return resolved
    snapshot, item = resolved

    err = _commit(store, snapshot, mark_done(snapshot, item))
    if err:
        return err

    log.info("Completed TODO #%d: %s", index, item.text)
    _brain_log(brain, f"done - {item.text}")
    return {"message": f"Done: {item.text}", "index": index, "text": item.text}


def handle_todo_edit(
    store: TodoStore,
    brain: Optional[BrainLog] = None,
    *,
    index: int,
    new_text: str,
    today: Optional[str] = None,
) -> dict:
    new_text = new_text.strip()
    if not new_text or not _is_single_line(new_text):
        return _error(EDIT_USAGE, "usage")

    resolved = _resolve(store, index, resolve_reference(today), EDIT_USAGE)
    if isinstance(resolved, dict):
        return resolved
    snapshot, item = resolved

    old_text = item.text
    err = _commit(store, snapshot, edit_todo(snapshot, item, new_text))
    if err:
        return err

    log.info("Edited TODO #%d", index)
    _brain_log(brain, f'edited - "{old_text}" -> "{new_text}"')
    return {
        "message": f'Edited TODO #{index}: "{old_text}" -> "{new_text}"',
        "index": index,
        "old_text": old_text,
        "new_text": new_text,
    }


def handle_todo_remove(
    store: TodoStore,
    brain: Optional[BrainLog] = None,
    *,
    index: int,
    today: Optional[str] = None,
) -> dict:
    resolved = _resolve(store, index, resolve_reference(today), REMOVE_USAGE)
    if isinstance(resolved, dict):
        return resolved
    snapshot, item = resolved

    err = _commit(store, snapshot, remove_todo(snapshot, item))
    if err:
        return err

    log.info("Removed TODO #%d: %s", index, item.text)
    _brain_log(brain, f"removed - {item.text}")
    return {"message": f"Removed TODO: {item.text}", "index": index, "text": item.text}
