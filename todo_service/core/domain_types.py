"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TodoId wraps the integer store key — the map is keyed by TodoId, never by the wrapper message
    - Watch lifecycle states encoded as Enums — no raw string matching
    - A terminated watch never returns to ACTIVE

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (SSE payloads are JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TodoId = NewType("TodoId", int)


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_POLL_INTERVAL_SECONDS = 1.0


# ─── Enums ───────────────────────────────────────────────────────

class WatchState(str, Enum):
    """Watch session lifecycle. ACTIVE is the only non-terminal state."""
    ACTIVE = "active"
    TERMINATED_NOT_FOUND = "terminated_not_found"
    TERMINATED_DISCONNECTED = "terminated_disconnected"


class WatchEventType(str, Enum):
    """Kinds of events a watch session pushes to its subscriber."""
    CHANGED = "todo"
    NOT_FOUND = "error"
