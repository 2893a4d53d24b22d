"""Todo Watch Stream — SSE delivery over the HTTP API.

Tests cover:
    - Watching an absent todo fails with 404 before any stream exists
    - Changes arrive as "todo" events, removal ends the stream with one "error" event
    - Client disconnect closes the channel and ends the poll task
    - Shutdown ends an attached stream without events

Design Decisions:
    - ASGITransport returns only after the app finishes the response, so every
      streamed scenario ends by removing the todo, which terminates the stream
"""

import asyncio
import json

from todo_service.main import app

from tests.services.todo_factory import POLL_INTERVAL

TODOS = "/api/v1/todos"


def _parse_sse(body: str) -> list[dict]:
    return [
        json.loads(line[len("data: "):])
        for line in body.split("\n\n")
        if line.startswith("data: ")
    ]


async def test_watch_absent_todo_returns_404(client, watch_manager):
    res = await client.get(f"{TODOS}/99/watch")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"
    assert watch_manager.active_count == 0


async def test_watch_streams_changes_then_not_found(client, seed_todo):
    stream = asyncio.create_task(client.get(f"{TODOS}/1/watch"))
    await asyncio.sleep(POLL_INTERVAL * 2)

    await client.post(
        f"{TODOS}/update-status", json={"id": {"id": 1}, "status": "done"},
    )
    await asyncio.sleep(POLL_INTERVAL * 4)
    await client.delete(f"{TODOS}/1")

    res = await asyncio.wait_for(stream, timeout=5)

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/event-stream")
    events = _parse_sse(res.text)
    assert [e["type"] for e in events] == ["todo", "error"]
    assert events[0]["data"]["status"] == "done"
    assert events[0]["data"]["title"] == seed_todo.title
    assert events[1]["data"]["code"] == "NOT_FOUND"
    assert events[1]["data"]["todo_id"] == 1


async def test_watch_removed_without_changes_emits_only_not_found(client, seed_todo):
    stream = asyncio.create_task(client.get(f"{TODOS}/1/watch"))
    await asyncio.sleep(POLL_INTERVAL * 2)
    await client.delete(f"{TODOS}/1")

    res = await asyncio.wait_for(stream, timeout=5)

    assert [e["type"] for e in _parse_sse(res.text)] == ["error"]


def _http_scope(path: str) -> dict:
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": b"",
        "headers": [(b"host", b"test")],
        "server": ("test", 80),
        "client": ("testclient", 50000),
    }


async def _wait_until_idle(manager, timeout: float = 1.0):
    async def _idle():
        while manager.active_count:
            await asyncio.sleep(POLL_INTERVAL / 5)
    await asyncio.wait_for(_idle(), timeout=timeout)


async def test_client_disconnect_ends_watch_session(client, watch_manager, seed_todo):
    started = asyncio.Event()
    disconnected = asyncio.Event()
    messages = []
    request_sent = False

    async def receive():
        nonlocal request_sent
        if not request_sent:
            request_sent = True
            return {"type": "http.request", "body": b"", "more_body": False}
        await disconnected.wait()
        return {"type": "http.disconnect"}

    async def send(message):
        messages.append(message)
        if message["type"] == "http.response.start":
            started.set()

    call = asyncio.create_task(app(_http_scope(f"{TODOS}/1/watch"), receive, send))
    await asyncio.wait_for(started.wait(), timeout=1)
    assert watch_manager.active_count == 1

    disconnected.set()
    await asyncio.wait_for(call, timeout=2)
    await _wait_until_idle(watch_manager)

    assert messages[0]["status"] == 200
    assert watch_manager.active_count == 0


async def test_shutdown_ends_open_stream_without_events(client, watch_manager, seed_todo):
    stream = asyncio.create_task(client.get(f"{TODOS}/1/watch"))
    await asyncio.sleep(POLL_INTERVAL * 2)
    assert watch_manager.active_count == 1

    await watch_manager.shutdown()
    res = await asyncio.wait_for(stream, timeout=5)

    assert res.status_code == 200
    assert _parse_sse(res.text) == []
