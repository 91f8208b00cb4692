"""REST API routes for todo-mcp."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from api.handlers import (
    handle_todo_add,
    handle_todo_done,
    handle_todo_edit,
    handle_todo_list,
    handle_todo_remove,
    handle_todo_search,
    handle_todo_status,
)
from memory.brain_log import BrainLog
from store.todo_store import TodoStore
from utils.config import TodoConfig

# Handler error code → HTTP status
_ERROR_STATUS = {
    "usage": 400,
    "not_found": 404,
    "conflict": 409,
}


# ---------------------------------------------------------------------------
# Request body models
# ---------------------------------------------------------------------------


class TodoTextBody(BaseModel):
    text: str


def _raise_for_error(result: dict) -> dict:
    if "error" in result:
        status = _ERROR_STATUS.get(result.get("code"), 400)
        raise HTTPException(status_code=status, detail=result["error"])
    return result


def register_routes(
    router: APIRouter,
    store: TodoStore,
    config: TodoConfig,
    brain: Optional[BrainLog] = None,
) -> None:
    """Attach to-do REST routes that use the shared store."""

    @router.get("/todos")
    def list_todos(limit: Optional[int] = Query(None, ge=1)):
        return handle_todo_list(store, limit=limit or config.max_list_items)

    @router.post("/todos")
    def add_todo(body: TodoTextBody):
        return _raise_for_error(
            handle_todo_add(store, brain, text=body.text, section_header=config.section_header)
        )

    @router.get("/todos/search")
    def search_todos(q: str = Query(""), limit: Optional[int] = Query(None, ge=1)):
        return _raise_for_error(
            handle_todo_search(store, query=q, limit=limit or config.max_list_items)
        )

    @router.post("/todos/{index}/done")
    def complete_todo(index: int):
        return _raise_for_error(handle_todo_done(store, brain, index=index))

    @router.patch("/todos/{index}")
    def edit_todo(index: int, body: TodoTextBody):
        return _raise_for_error(handle_todo_edit(store, brain, index=index, new_text=body.text))

    @router.delete("/todos/{index}")
    def remove_todo(index: int):
        return _raise_for_error(handle_todo_remove(store, brain, index=index))

    @router.get("/status")
    def status(limit: int = Query(50, ge=1, le=200), overdue: bool = Query(False)):
        return handle_todo_status(store, limit=limit, overdue=overdue)
