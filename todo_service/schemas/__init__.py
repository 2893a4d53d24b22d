"""Pydantic Schemas — the todo record and its request/response messages.

Invariants:
    - Schemas validate at system boundary (requests, responses, stream payloads)
"""
