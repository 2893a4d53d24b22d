"""Service test fixtures — fresh store, fast-polling watch manager, FastAPI test client.

Invariants:
    - Every test gets an empty TodoStore
    - Watch managers poll every 50ms and are shut down after each test
    - client attaches the fixtures to app.state exactly like the lifespan does

Design Decisions:
    - ASGITransport does not run the lifespan, so app.state is patched directly
      and restored afterwards
"""

import pytest
from httpx import ASGITransport, AsyncClient

from todo_service.main import app
from todo_service.services.todo_store import TodoStore
from todo_service.services.watch_manager import WatchManager

from tests.services.todo_factory import POLL_INTERVAL, make_todo


@pytest.fixture
def store():
    return TodoStore()


@pytest.fixture
async def watch_manager(store):
    manager = WatchManager(store, poll_interval=POLL_INTERVAL)
    yield manager
    await manager.shutdown()


@pytest.fixture
async def seed_todo(store):
    """Insert todo 1 with status 'open'."""
    todo = make_todo(1, "open")
    await store.add(todo)
    return todo


@pytest.fixture
async def client(store, watch_manager):
    """FastAPI test client bound to the per-test store and watch manager."""
    missing = object()
    original_store = getattr(app.state, "todo_store", missing)
    original_manager = getattr(app.state, "watch_manager", missing)
    app.state.todo_store = store
    app.state.watch_manager = watch_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    for name, original in (
        ("todo_store", original_store), ("watch_manager", original_manager),
    ):
        if original is missing:
            delattr(app.state, name)
        else:
            setattr(app.state, name, original)
