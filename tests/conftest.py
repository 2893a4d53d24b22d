"""Root conftest — shared test configuration."""

import os

# Settings are read once (lru_cache) when todo_service.main is imported
os.environ.setdefault("WATCH_POLL_INTERVAL_SECONDS", "0.05")
os.environ.setdefault("LOG_FORMAT", "text")
