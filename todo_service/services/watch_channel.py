"""Watch Channel — unbounded per-subscriber output channel for a watch session.

Invariants:
    - send() never blocks (unbounded queue) and returns False once the consumer closed
    - Iteration ends right after the terminal event is yielded, or at finish()
    - close() is idempotent and only ever called by the consumer side
    - finish() is only ever called by the producer side, when it stops without a terminal event

Design Decisions:
    - asyncio.Queue plus a closed flag: the producer detects a gone subscriber on its
      next send and stops polling instead of feeding a dead queue forever
    - finish() enqueues an end-of-stream marker so a consumer blocked in receive()
      wakes up when the session is cancelled on shutdown
"""

import asyncio

from todo_service.core.watch_session import WatchEvent

_END_OF_STREAM = None


class WatchChannel:
    """Single-producer, single-consumer event channel."""

    def __init__(self):
        self._queue: asyncio.Queue[WatchEvent | None] = asyncio.Queue()
        self._closed = False
        self._finished = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, event: WatchEvent) -> bool:
        """Enqueue an event. False means the receiver is gone."""
        if self._closed:
            return False
        self._queue.put_nowait(event)
        return True

    def finish(self) -> None:
        """Producer is gone: end the consumer's iteration without an event."""
        if not self._closed:
            self._queue.put_nowait(_END_OF_STREAM)

    def close(self) -> None:
        self._closed = True

    async def receive(self) -> WatchEvent | None:
        """Next event, or None once the producer finished."""
        return await self._queue.get()

    def __aiter__(self):
        return self

    async def __anext__(self) -> WatchEvent:
        if self._finished:
            raise StopAsyncIteration
        event = await self.receive()
        if event is _END_OF_STREAM:
            self._finished = True
            raise StopAsyncIteration
        if event.is_terminal:
            self._finished = True
        return event
