"""Route Dependencies — hand the shared store and watch manager to each request.

Invariants:
    - Both objects are created once in the lifespan and live on app.state
    - Routes never construct a store; tests swap them via app.dependency_overrides
"""

from fastapi import Request

from todo_service.services.todo_store import TodoStore
from todo_service.services.watch_manager import WatchManager


def get_todo_store(request: Request) -> TodoStore:
    return request.app.state.todo_store


def get_watch_manager(request: Request) -> WatchManager:
    return request.app.state.watch_manager
