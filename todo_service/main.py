"""Todo Service API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TodoServiceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Store and watch manager built once on startup, attached to app.state
    - Every watch task cancelled on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py to keep this module thin
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_service.api.error_handlers import register_error_handlers
from todo_service.infrastructure.observability import setup_logging
from todo_service.services.todo_store import TodoStore
from todo_service.services.watch_manager import WatchManager
from todo_service.config import get_settings
from todo_service.api.routes import health, todos, todo_watch

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = TodoStore()
    app.state.todo_store = store
    app.state.watch_manager = WatchManager(
        store, poll_interval=settings.watch_poll_interval_seconds,
    )
    logger.info("Todo service started")
    yield
    await app.state.watch_manager.shutdown()
    logger.info("Todo service shutting down")


app = FastAPI(
    title="Todo Service API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(todos.router)
app.include_router(todo_watch.router)

register_error_handlers(app)
