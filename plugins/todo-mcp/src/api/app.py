"""
FastAPI application factory for the todo REST API.

Routes live under /api; interactive docs are served at /api/docs. The TODO
file is the only backing store, so a filesystem failure while reading or
committing it is reported as 503 rather than a bare 500.
"""

import logging
from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from api.routes import register_routes
from memory.brain_log import BrainLog
from store.todo_store import TodoStore
from utils.config import TodoConfig

log = logging.getLogger(__name__)


def create_app(store: TodoStore, config: TodoConfig, brain: Optional[BrainLog] = None) -> FastAPI:
    app = FastAPI(title="todo-mcp", docs_url="/api/docs", openapi_url="/api/openapi.json")

    @app.exception_handler(OSError)
    async def todo_file_unavailable(request: Request, exc: OSError) -> JSONResponse:
        log.error("%s %s failed on %s: %s", request.method, request.url.path, store.file_path, exc)
        reason = exc.strerror or str(exc)
        return JSONResponse(status_code=503, content={"detail": f"TODO file unavailable: {reason}"})

    api = APIRouter(prefix="/api")
    register_routes(api, store, config, brain)
    app.include_router(api)

    return app
