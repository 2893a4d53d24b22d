"""Infrastructure Layer — process-level concerns (logging setup).

Invariants:
    - Nothing here touches the todo map or watch sessions
"""
