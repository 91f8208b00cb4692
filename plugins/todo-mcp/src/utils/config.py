"""
Environment-driven configuration for the todo-mcp server.

    TODO_ENABLED         "false" disables the server entirely
    TODO_FILE            path to the TODO markdown file
    TODO_BRAIN_LOG       "false" disables the brain-log side channel
    TODO_BRAIN_STORE     path to the brain-log JSONL file
    TODO_MAX_LIST_ITEMS  cap on items shown by list/search
    TODO_SECTION_HEADER  heading new items are inserted under
    API_ENABLED          "false" disables the REST API thread
    API_PORT             REST API port
    API_HOST             interface the REST API binds to
    LOG_LEVEL            logging level name
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

log = logging.getLogger(__name__)

DEFAULT_TODO_FILE = "~/.openclaw/workspace/TODO.md"
DEFAULT_BRAIN_STORE = "~/.openclaw/workspace/memory/brain-memory.jsonl"
DEFAULT_MAX_LIST_ITEMS = 30
DEFAULT_API_PORT = 9410
DEFAULT_API_HOST = "0.0.0.0"


@dataclass
class TodoConfig:
    todo_file: Path
    brain_store_path: Path
    enabled: bool = True
    brain_log: bool = True
    max_list_items: int = DEFAULT_MAX_LIST_ITEMS
    section_header: Optional[str] = None
    api_enabled: bool = True
    api_port: int = DEFAULT_API_PORT
    api_host: str = DEFAULT_API_HOST
    log_level: str = "INFO"


def _parse_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("true", "1", "yes")


def _parse_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "")
    if not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring invalid %s=%r, using %d", name, raw, default)
        return default


def load_config(environ: Optional[Mapping[str, str]] = None) -> TodoConfig:
    """Build a TodoConfig from environment variables (default: os.environ)."""
    env = os.environ if environ is None else environ

    section_header = env.get("TODO_SECTION_HEADER", "").strip() or None

    return TodoConfig(
        todo_file=Path(env.get("TODO_FILE") or DEFAULT_TODO_FILE).expanduser(),
        brain_store_path=Path(env.get("TODO_BRAIN_STORE") or DEFAULT_BRAIN_STORE).expanduser(),
        enabled=_parse_bool(env.get("TODO_ENABLED"), True),
        brain_log=_parse_bool(env.get("TODO_BRAIN_LOG"), True),
        max_list_items=_parse_int(env, "TODO_MAX_LIST_ITEMS", DEFAULT_MAX_LIST_ITEMS),
        section_header=section_header,
        api_enabled=_parse_bool(env.get("API_ENABLED"), True),
        api_port=_parse_int(env, "API_PORT", DEFAULT_API_PORT),
        api_host=env.get("API_HOST", "").strip() or DEFAULT_API_HOST,
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )
