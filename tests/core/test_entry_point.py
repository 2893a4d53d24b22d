"""Entry Point — `python -m todo_service` announces its address and starts uvicorn."""

import logging

import todo_service.__main__ as entry_point
from todo_service.config import get_settings
from todo_service.infrastructure.observability import _ServiceHandler


def test_main_logs_address_and_runs_uvicorn(monkeypatch, caplog):
    calls = []
    monkeypatch.setattr(
        entry_point.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)),
    )
    caplog.set_level(logging.INFO, logger="todo_service.__main__")
    settings = get_settings()

    try:
        entry_point.main()
    finally:
        for handler in [h for h in logging.root.handlers if isinstance(h, _ServiceHandler)]:
            logging.root.removeHandler(handler)

    assert f"Server running on {settings.host}:{settings.port}" in caplog.text
    assert calls == [(
        "todo_service.main:app",
        {
            "host": settings.host,
            "port": settings.port,
            "log_level": settings.log_level.lower(),
        },
    )]
