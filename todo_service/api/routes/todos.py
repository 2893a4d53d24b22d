"""Todo Routes — Add, Remove, UpdateStatus and Get over the shared store.

Invariants:
    - Every route delegates to exactly one TodoStore operation (one lock acquisition)
    - Store errors propagate to the global TodoServiceError handler (never caught here)
    - Get returns a copy: serializing it cannot touch the stored todo

Design Decisions:
    - UpdateStatus takes the identifier in the body, not the path, so a missing id
      surfaces as INVALID_ARGUMENT like the other identifier-bearing messages
"""

import logging

from fastapi import APIRouter, Depends, Path, status

from todo_service.api.dependencies import get_todo_store
from todo_service.schemas.todo import (
    Todo, TodoChangeResponse, TodoIdentifier, TodoStatusUpdateRequest,
)
from todo_service.services.todo_store import TodoStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/todos", tags=["todos"])

@router.post(
    "", response_model=TodoChangeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_todo(body: Todo, store: TodoStore = Depends(get_todo_store)):
    """Add a todo. Rejects duplicates instead of overwriting."""
    return await store.add(body)


@router.post("/update-status", response_model=TodoChangeResponse)
async def update_todo_status(
    body: TodoStatusUpdateRequest, store: TodoStore = Depends(get_todo_store),
):
    """Update the status of a todo."""
    return await store.update_status(body)


@router.get("/{todo_id}", response_model=Todo)
async def get_todo(
    todo_id: int = Path(ge=0, le=2**32 - 1),
    store: TodoStore = Depends(get_todo_store),
):
    """Get a todo by identifier."""
    return await store.get(TodoIdentifier(id=todo_id))


@router.delete("/{todo_id}", response_model=TodoChangeResponse)
async def remove_todo(
    todo_id: int = Path(ge=0, le=2**32 - 1),
    store: TodoStore = Depends(get_todo_store),
):
    """Remove a todo."""
    return await store.remove(TodoIdentifier(id=todo_id))
