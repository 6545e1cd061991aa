"""Root conftest — shared test configuration."""

import os

# Tests never pick up a real edit token or database from the environment
os.environ.setdefault("EDIT_API_TOKEN", "")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
