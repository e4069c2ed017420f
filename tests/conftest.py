"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or request authority
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("API_URL", "http://authority.test/v2")
