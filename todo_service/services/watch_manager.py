"""Watch Manager — spawns one polling task per watch and feeds its channel.

Invariants:
    - watch() fails with NotFoundError before any task or channel exists
    - The returned channel is usable immediately; the first event is a post-subscription change
    - The store lock is held only for the read, never across a channel send
    - A closed channel stops the task before its next store read
    - Each task terminates exactly once: NOT_FOUND sent, subscriber gone, or cancelled
    - A cancelled task finishes its channel so an attached stream ends cleanly

Design Decisions:
    - Task owns copies of (store handle, todo id, channel): no callback registry, no event bus
    - Poll interval injected by the caller (lifespan reads it from Settings), default 1s
    - Tasks tracked in a set so shutdown() can cancel them and the readiness probe can count them
"""

import asyncio
import logging

from todo_service.core.domain_types import DEFAULT_POLL_INTERVAL_SECONDS, TodoId
from todo_service.core.errors import NotFoundError
from todo_service.core.watch_session import WatchSession
from todo_service.schemas.todo import Todo, TodoIdentifier
from todo_service.services.todo_store import TodoStore
from todo_service.services.watch_channel import WatchChannel

logger = logging.getLogger(__name__)


class WatchManager:
    """Starts and tracks leveled watch sessions over a TodoStore."""

    def __init__(
        self,
        store: TodoStore,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ):
        self._store = store
        self._poll_interval = poll_interval
        self._tasks: set[asyncio.Task] = set()

    @property
    def active_count(self) -> int:
        return len(self._tasks)

    async def watch(self, identifier: TodoIdentifier) -> WatchChannel:
        """Subscribe to changes of one todo. Raises NotFoundError if absent now."""
        todo_id = TodoId(identifier.id)
        snapshot = await self._store.find(todo_id)
        if snapshot is None:
            raise NotFoundError(todo_id)

        session: WatchSession[Todo] = WatchSession(todo_id, snapshot)
        channel = WatchChannel()
        task = asyncio.create_task(
            self._poll(session, channel), name=f"watch-todo-{todo_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info(
            "Watch session started",
            extra={"todo_id": todo_id, "active_watches": self.active_count},
        )
        return channel

    async def shutdown(self) -> None:
        """Cancel every running poll task and wait for them to finish."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if tasks:
            logger.info("Cancelled %d watch session(s)", len(tasks))

    async def _poll(
        self, session: WatchSession[Todo], channel: WatchChannel,
    ) -> None:
        try:
            await self._poll_until_terminated(session, channel)
        except asyncio.CancelledError:
            session.disconnect()
            channel.finish()
            raise
        finally:
            logger.info(
                "Watch session ended (%s)", session.state.value,
                extra={"todo_id": session.todo_id, "watch_state": session.state.value},
            )

    async def _poll_until_terminated(
        self, session: WatchSession[Todo], channel: WatchChannel,
    ) -> None:
        while session.is_active:
            await asyncio.sleep(self._poll_interval)
            if channel.closed:
                session.disconnect()
                break

            current = await self._store.find(session.todo_id)
            event = session.observe(current)
            if event is None:
                continue
            if not channel.send(event):
                session.disconnect()
                break
            logger.debug(
                "Watch event %s sent", event.type.value,
                extra={"todo_id": session.todo_id},
            )