"""Watch Session — pure change detection for a single leveled watch.

Invariants:
    - last_observed starts as the snapshot taken at subscription time
    - observe() emits CHANGED only on structural inequality, then advances last_observed
    - observe(None) emits exactly one NOT_FOUND and terminates the session
    - A terminated session emits nothing, ever again

Design Decisions:
    - Leveled, not edge-triggered: only the value seen at each poll is compared, so
      several writes between polls collapse into one event carrying the latest value
    - Pure dataclass, no IO, no async: the polling loop in services/watch_manager.py
      does the sleeping, store reads and channel sends around this logic
    - Generic over the watched value: anything comparable with != works
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from todo_service.core.domain_types import TodoId, WatchEventType, WatchState

T = TypeVar("T")


@dataclass(frozen=True)
class WatchEvent(Generic[T]):
    """One item pushed to a subscriber. NOT_FOUND events carry no value."""
    type: WatchEventType
    todo_id: TodoId
    value: T | None = None

    @property
    def is_terminal(self) -> bool:
        return self.type == WatchEventType.NOT_FOUND


@dataclass
class WatchSession(Generic[T]):
    """Per-subscriber watch state — pure dataclass, no IO."""

    todo_id: TodoId
    last_observed: T
    state: WatchState = WatchState.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.state == WatchState.ACTIVE

    def observe(self, current: T | None) -> WatchEvent[T] | None:
        """Compare the value read at this poll with the last one seen.

        Returns the event to send, or None when there is nothing to report.
        """
        if not self.is_active:
            return None
        if current is None:
            self.state = WatchState.TERMINATED_NOT_FOUND
            return WatchEvent(WatchEventType.NOT_FOUND, self.todo_id)
        if current != self.last_observed:
            self.last_observed = current
            return WatchEvent(WatchEventType.CHANGED, self.todo_id, current)
        return None

    def disconnect(self) -> None:
        """Subscriber went away. No-op if already terminated."""
        if self.is_active:
            self.state = WatchState.TERMINATED_DISCONNECTED
