"""Todo Watch Stream — SSE stream of changes to one todo.

Invariants:
    - NOT_FOUND at subscription time is a plain 404, raised before any streaming starts
    - Stream ends right after the terminal NOT_FOUND event
    - Client disconnect closes the channel so the poll task stops on its next tick

Design Decisions:
    - StreamingResponse for SSE: event_generator yields formatted SSE lines
    - Channel closed in finally: covers normal end, cancellation and generator close
"""

import asyncio
import json
import logging

from fastapi import APIRouter, Depends, Path
from fastapi.responses import StreamingResponse

from todo_service.api.dependencies import get_watch_manager
from todo_service.core.errors import NotFoundError
from todo_service.core.watch_session import WatchEvent
from todo_service.schemas.todo import TodoIdentifier
from todo_service.services.watch_manager import WatchManager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/todos", tags=["todos"])

# SSE headers prevent proxy/browser buffering of streamed events.
_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


@router.get("/{todo_id}/watch")
async def watch_todo(
    todo_id: int = Path(ge=0, le=2**32 - 1),
    manager: WatchManager = Depends(get_watch_manager),
):
    """Watch a todo. Emits its new value on every observed change."""
    channel = await manager.watch(TodoIdentifier(id=todo_id))

    async def event_generator():
        try:
            async for event in channel:
                yield _sse_line(_to_sse_event(event))
        except asyncio.CancelledError:
            logger.info(
                "Client disconnected from watch stream",
                extra={"todo_id": todo_id},
            )
            return
        finally:
            channel.close()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )


def _to_sse_event(event: WatchEvent) -> dict:
    """Map a watch event to its SSE payload."""
    if event.is_terminal:
        return NotFoundError(event.todo_id).to_sse_event()
    return {"type": event.type.value, "data": event.value.model_dump(mode="json")}


def _sse_line(event: dict) -> str:
    """Format event as SSE data line."""
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"
