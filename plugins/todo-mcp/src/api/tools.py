"""MCP tool registration for todo-mcp."""

import json
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

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

log = logging.getLogger(__name__)


def _message(result: dict) -> str:
    """Command tools answer with plain text, like chat commands."""
    return result.get("error") or result["message"]


def register_tools(
    mcp: FastMCP,
    store: TodoStore,
    config: TodoConfig,
    brain: Optional[BrainLog] = None,
) -> None:
    """Register all to-do tools onto the FastMCP instance."""

    @mcp.tool()
    def todo_list() -> str:
        """
        List open TODO items, overdue first, then due today, upcoming and undated.

        The numbers in the listing are the indices accepted by todo_done,
        todo_edit and todo_remove.
        """
        return _message(handle_todo_list(store, limit=config.max_list_items))

    @mcp.tool()
    def todo_add(text: str) -> str:
        """
        Add a TODO item.

        Args:
            text: Item text. May contain #tags, a priority (!high, !medium,
                  !low) and a due date (@due(YYYY-MM-DD)).
        """
        return _message(
            handle_todo_add(store, brain, text=text, section_header=config.section_header)
        )

    @mcp.tool()
    def todo_done(index: int) -> str:
        """
        Mark a TODO item done.

        Args:
            index: 1-based index from todo_list
        """
        return _message(handle_todo_done(store, brain, index=index))

    @mcp.tool()
    def todo_edit(index: int, new_text: str) -> str:
        """
        Replace a TODO item's text, keeping its checkbox state.

        Args:
            index: 1-based index from todo_list
            new_text: Replacement text (annotations allowed)
        """
        return _message(handle_todo_edit(store, brain, index=index, new_text=new_text))

    @mcp.tool()
    def todo_remove(index: int) -> str:
        """
        Delete a TODO item from the file.

        Args:
            index: 1-based index from todo_list
        """
        return _message(handle_todo_remove(store, brain, index=index))

    @mcp.tool()
    def todo_search(query: str) -> str:
        """
        Search open TODO items.

        Tokens combine with AND: free text (substring), #tag (all must match),
        !priority (any may match), and one of @due (has a due date),
        @overdue or @today.

        Args:
            query: e.g. "#dev !high login" or "@overdue"
        """
        return _message(handle_todo_search(store, query=query, limit=config.max_list_items))

    @mcp.tool()
    def todo_status(limit: int = 50, overdue: bool = False) -> str:
        """
        Return structured TODO status from the TODO file.

        Args:
            limit: Maximum number of open items to include (1-200, default 50)
            overdue: If True, return only overdue items

        Returns:
            JSON object with counts, open items (due-date order) and all open tags
        """
        limit = max(1, min(limit, 200))
        return json.dumps(handle_todo_status(store, limit=limit, overdue=overdue), indent=2)

    log.info("Registered todo tools for %s", store.file_path)
