"""
Taskboard Server — HTTP/JSON API over the Task Store
=====================================================
FastAPI application exposing create/read/update/delete on one TaskStore.

Launch:
    python -m taskboard serve                # Via CLI
    python -m taskboard serve --port 8080

Endpoints:
    GET    /                  → Server info + endpoint map
    GET    /tasks?title=&date= → Tasks matching the filters
    GET    /tasks/{id}        → One task
    POST   /tasks             → Create a task (201)
    PATCH  /tasks/{id}        → Merge fields into a task
    DELETE /tasks/{id}        → Remove a task (204)

Every error is returned as {"error": "<message>"}.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard import __version__
from taskboard.config import Settings
from taskboard.errors import TaskboardError, TaskValidationError
from taskboard.logging_setup import setup_logging
from taskboard.models import TaskCategory, TaskPriority, TaskStatus, TaskUpdate
from taskboard.store import TaskFilter, TaskStore

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "GET /tasks": "List tasks (filters: title, date)",
    "GET /tasks/:id": "Get a task by id",
    "POST /tasks": "Create a task",
    "PATCH /tasks/:id": "Update a task",
    "DELETE /tasks/:id": "Delete a task",
}

VOCABULARIES = {
    "category": [c.value for c in TaskCategory],
    "status": [s.value for s in TaskStatus],
    "priority": [p.value for p in TaskPriority],
}


# ─────────────────────────────────────────────────────────────
#  Request Models
# ─────────────────────────────────────────────────────────────

class TaskCreateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None


class TaskPatchRequest(BaseModel):
    """Partial task. Only the keys present in the JSON body are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None

    @classmethod
    def parse(cls, body: Any) -> TaskPatchRequest:
        """Validate a decoded JSON body, raising TaskValidationError on bad input."""
        if body is None:
            return cls()
        if not isinstance(body, dict):
            raise TaskValidationError("Request body must be a JSON object")
        try:
            return cls.model_validate(body)
        except ValidationError as e:
            raise TaskValidationError(_describe_errors(e.errors())) from e

    def to_update(self) -> TaskUpdate:
        """Convert to a TaskUpdate, rejecting explicit nulls.

        A null description clears it; any other null is an error.
        """
        values = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is None:
                if name != "description":
                    raise TaskValidationError(f"Field '{name}' cannot be null")
                value = ""
            values[name] = value
        return TaskUpdate(**values)


# ─────────────────────────────────────────────────────────────
#  Error Handlers
# ─────────────────────────────────────────────────────────────

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _handle_taskboard_error(request: Request, exc: TaskboardError):
    logger.info("%s %s rejected (%d): %s", request.method, request.url.path,
                exc.status_code, exc.message)
    return _error(exc.status_code, exc.message)


async def _handle_http_error(request: Request, exc: StarletteHTTPException):
    # An unsupported method on a known path is reported like an unknown route.
    if exc.status_code in (404, 405):
        return _error(404, "Route not found")
    return _error(exc.status_code, str(exc.detail))


def _describe_errors(errors) -> str:
    """One message for the first pydantic error, body or field level."""
    first = errors[0] if errors else {}
    kind = first.get("type", "")
    if kind == "json_invalid":
        return "Request body must be valid JSON"
    if kind in ("model_type", "model_attributes_type", "dict_type"):
        return "Request body must be a JSON object"
    loc = list(first.get("loc", ()))
    if loc and loc[0] == "body":
        loc = loc[1:]
    field_name = ".".join(str(p) for p in loc) or "body"
    return f"Invalid value for '{field_name}': {first.get('msg', 'invalid')}"


async def _handle_validation_error(request: Request, exc: RequestValidationError):
    message = _describe_errors(exc.errors())
    logger.info("%s %s rejected (400): %s", request.method, request.url.path, message)
    return _error(400, message)


# ─────────────────────────────────────────────────────────────
#  App Factory
# ─────────────────────────────────────────────────────────────

def get_store(request: Request) -> TaskStore:
    """Dependency: the store bound to the running application."""
    return request.app.state.store


def create_app(store: Optional[TaskStore] = None,
               settings: Optional[Settings] = None) -> FastAPI:
    """Build a FastAPI app serving `store` (a fresh seeded store by default).

    Handlers are coroutines that never await, so each request runs to
    completion on the event loop before the next one starts.
    """
    settings = settings or Settings()
    if store is None:
        store = TaskStore(seed=settings.seed)

    # No generated docs routes: every path outside the task API is a 404.
    app = FastAPI(title="Taskboard", version=__version__,
                  docs_url=None, redoc_url=None, openapi_url=None)
    app.state.store = store
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TaskboardError, _handle_taskboard_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)

    # ─── Routes ───────────────────────────────────────────

    @app.api_route("/", methods=["GET", "HEAD"])
    async def index():
        """Server info and the endpoint map."""
        return {
            "message": "Task Management Server is running",
            "version": __version__,
            "endpoints": ENDPOINTS,
            "fields": VOCABULARIES,
        }

    @app.api_route("/tasks", methods=["GET", "HEAD"])
    async def list_tasks(title: Optional[str] = None, date: Optional[str] = None,
                         store: TaskStore = Depends(get_store)):
        tasks = store.list(TaskFilter(title=title, date=date))
        return [t.to_dict() for t in tasks]

    @app.api_route("/tasks/{task_id}", methods=["GET", "HEAD"])
    async def get_task(task_id: str, store: TaskStore = Depends(get_store)):
        return store.get(task_id).to_dict()

    @app.post("/tasks", status_code=201)
    async def create_task(body: Optional[TaskCreateRequest] = None,
                          store: TaskStore = Depends(get_store)):
        body = body or TaskCreateRequest()
        task = store.create(
            title=body.title,
            description=body.description,
            category=body.category,
            status=body.status,
            priority=body.priority,
        )
        return task.to_dict()

    @app.patch("/tasks/{task_id}")
    async def update_task(task_id: str, body: Any = Body(None),
                          store: TaskStore = Depends(get_store)):
        store.get(task_id)  # 404 before any body check
        changes = TaskPatchRequest.parse(body).to_update()
        return store.update(task_id, changes).to_dict()

    @app.delete("/tasks/{task_id}", status_code=204)
    async def delete_task(task_id: str, store: TaskStore = Depends(get_store)):
        store.delete(task_id)
        return Response(status_code=204)

    return app


# ─────────────────────────────────────────────────────────────
#  Startup
# ─────────────────────────────────────────────────────────────

def run_server(settings: Optional[Settings] = None):
    """Launch the taskboard server with uvicorn."""
    import uvicorn

    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)
    app = create_app(settings=settings)

    logger.info("Taskboard listening on http://localhost:%d (%d tasks loaded)",
                settings.port, len(app.state.store))

    uvicorn.run(app, host=settings.host, port=settings.port,
                log_level=settings.log_level)
