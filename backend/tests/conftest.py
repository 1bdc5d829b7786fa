"""Root conftest: shared test configuration."""

import os

# Ensure tests never touch a real database or real Wikipedia by accident
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("WIKIPEDIA_API_URL", "https://wiki.test/w/api.php")
os.environ.setdefault("LOG_FORMAT", "text")
