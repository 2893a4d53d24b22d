"""Health & Readiness — liveness and readiness responses."""

from todo_service.schemas.todo import TodoIdentifier


async def test_liveness_returns_healthy(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_reports_store_and_watches(client, watch_manager, seed_todo):
    await watch_manager.watch(TodoIdentifier(id=1))
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json() == {
        "status": "ready",
        "checks": {"todos": 1, "active_watches": 1},
    }


async def test_readiness_503_before_startup(client):
    from todo_service.main import app

    app.state.todo_store = None
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "store_uninitialized"
