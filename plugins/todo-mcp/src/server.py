"""
todo-mcp server entry point.

Startup sequence:
1. Load configuration from the environment (utils.config)
2. Bootstrap the TODO file if it does not exist
3. Set up the brain log (unless TODO_BRAIN_LOG=false)
4. Start REST API server in background thread (if API_ENABLED)
5. Register all MCP tools
6. Run MCP server (stdio transport)
"""

import logging
import sys
import threading

from mcp.server.fastmcp import FastMCP

from api.tools import register_tools
from memory.brain_log import BrainLog
from store.todo_store import TodoStore
from utils.config import TodoConfig, load_config

log = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _serve_api(app, config: TodoConfig) -> None:
    """Thread target: block on uvicorn until the process exits."""
    import uvicorn

    log.info("Starting REST API on %s:%d", config.api_host, config.api_port)
    server = uvicorn.Server(
        uvicorn.Config(app, host=config.api_host, port=config.api_port, log_level="warning")
    )
    server.run()


def main() -> None:
    config = load_config()
    _setup_logging(config.log_level)

    if not config.enabled:
        log.info("todo-mcp disabled (TODO_ENABLED=false)")
        return

    store = TodoStore(config.todo_file)
    try:
        store.ensure_exists()
    except OSError as e:
        log.error("Cannot create TODO file %s: %s", config.todo_file, e)
        sys.exit(1)

    brain = BrainLog(config.brain_store_path) if config.brain_log else None

    log.info("TODO file: %s", config.todo_file)
    log.info("Brain log: %s", config.brain_store_path if brain else "disabled")

    if config.api_enabled:
        from api.app import create_app

        app = create_app(store, config, brain)
        threading.Thread(target=_serve_api, args=(app, config), daemon=True, name="todo-api").start()

    mcp = FastMCP("todo-mcp")
    register_tools(mcp, store, config, brain)

    log.info("Starting todo-mcp server")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
