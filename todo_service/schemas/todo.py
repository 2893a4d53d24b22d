"""Todo Schemas — Pydantic models for the record and its request/response messages.

Invariants:
    - Todo.id is optional at the boundary so a missing identifier reaches the store
      and surfaces as INVALID_ARGUMENT (not a generic validation error)
    - TodoIdentifier.id is a non-negative integer key
    - Equality is structural (Pydantic field-wise ==), which is what watches compare

Design Decisions:
    - Identifier wrapped in its own message: same shape for Add, Remove, Get, Watch acks
    - status is free-form str: lifecycle vocabulary is controlled by the caller
"""

from pydantic import BaseModel, Field


class TodoIdentifier(BaseModel):
    """Key of a todo in the store."""
    id: int = Field(ge=0, le=2**32 - 1)


class Todo(BaseModel):
    """A stored todo. Only status is mutable through the API."""
    id: TodoIdentifier | None = None
    title: str = ""
    description: str = ""
    status: str = ""


class TodoStatusUpdateRequest(BaseModel):
    """UpdateStatus payload."""
    id: TodoIdentifier | None = None
    status: str


class TodoChangeResponse(BaseModel):
    """Acknowledgement for Add, Remove and UpdateStatus."""
    id: TodoIdentifier
    message: str
