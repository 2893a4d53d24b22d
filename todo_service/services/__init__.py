"""Services Layer — the shared todo store and the watch manager built on it.

Invariants:
    - Every store access goes through TodoStore's lock
    - WatchManager owns every background polling task it spawns
"""
