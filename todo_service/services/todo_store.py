"""Todo Store — shared in-memory map from identifier to todo, guarded by one lock.

Invariants:
    - Every read and every write holds self._lock for its whole duration
    - A stored todo's id.id always equals its key
    - add never overwrites: duplicate keys are rejected with AlreadyExistsError
    - Values crossing the boundary are deep copies — callers never alias stored todos
    - update_status mutates only the status field

Design Decisions:
    - One asyncio.Lock, no reader/writer split: contention is low and operations are
      a lock plus a dict operation (ADR: simplicity over throughput)
    - Explicit instance constructed in the app lifespan and injected via dependencies;
      no module-level singleton
    - find() returns None for a missing key so the watch poll loop has no exception path
"""

import asyncio
import logging

from todo_service.core.domain_types import TodoId
from todo_service.core.errors import (
    AlreadyExistsError, InvalidArgumentError, NotFoundError,
)
from todo_service.schemas.todo import (
    Todo, TodoChangeResponse, TodoIdentifier, TodoStatusUpdateRequest,
)

logger = logging.getLogger(__name__)


class TodoStore:
    """Lock-protected todo map. All operations are linearizable."""

    def __init__(self):
        self._todos: dict[TodoId, Todo] = {}
        self._lock = asyncio.Lock()

    async def add(self, todo: Todo) -> TodoChangeResponse:
        if todo.id is None:
            raise InvalidArgumentError("Id missing")
        identifier = todo.id
        key = TodoId(identifier.id)
        async with self._lock:
            if key in self._todos:
                raise AlreadyExistsError(key)
            self._todos[key] = todo.model_copy(deep=True)
        logger.info("Todo created", extra={"todo_id": key})
        return TodoChangeResponse(
            id=identifier.model_copy(), message="New todo created",
        )

    async def remove(self, identifier: TodoIdentifier) -> TodoChangeResponse:
        key = TodoId(identifier.id)
        async with self._lock:
            if key not in self._todos:
                raise NotFoundError(key)
            del self._todos[key]
        logger.info("Todo removed", extra={"todo_id": key})
        return TodoChangeResponse(
            id=identifier.model_copy(), message="Removed a todo",
        )

    async def update_status(
        self, request: TodoStatusUpdateRequest,
    ) -> TodoChangeResponse:
        if request.id is None:
            raise InvalidArgumentError("Missing Id")
        key = TodoId(request.id.id)
        async with self._lock:
            todo = self._todos.get(key)
            if todo is None:
                raise NotFoundError(key)
            todo.status = request.status
        logger.info(
            "Todo status updated to %r", request.status, extra={"todo_id": key},
        )
        return TodoChangeResponse(
            id=request.id.model_copy(), message="Updated status successfully",
        )

    async def get(self, identifier: TodoIdentifier) -> Todo:
        todo = await self.find(TodoId(identifier.id))
        if todo is None:
            raise NotFoundError(identifier.id)
        return todo

    async def find(self, todo_id: TodoId) -> Todo | None:
        """Copy of the todo under todo_id, or None if absent."""
        async with self._lock:
            todo = self._todos.get(todo_id)
            return todo.model_copy(deep=True) if todo is not None else None

    async def count(self) -> int:
        async with self._lock:
            return len(self._todos)
