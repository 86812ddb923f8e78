"""Root conftest - shared test configuration."""

import os

# Tests never write under the working directory's ./data
os.environ.setdefault("STORAGE_BACKEND", "file")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
