"""Service test fixtures - note stores over test repositories + FastAPI test client.

Invariants:
    - Every test gets a fresh repository (in-memory or under tmp_path)
    - get_note_store dependency overridden; the app's lifespan never runs
    - Tokens are minted at real "now" so the 24h freshness check passes

Design Decisions:
    - FakeClock drives the store's server timestamps so ordering is deterministic
"""

import pytest
from httpx import ASGITransport, AsyncClient

from notesync.api.dependencies import get_note_store
from notesync.core.identity import encode_token
from notesync.infrastructure.json_file_store import JsonFileNoteRepository
from notesync.main import app
from notesync.services.note_store import NoteStore
from tests.services.fakes import FakeClock, InMemoryNoteRepository


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_repo():
    return InMemoryNoteRepository()


@pytest.fixture
def store(memory_repo, clock):
    return NoteStore(memory_repo, clock=clock)


@pytest.fixture
def json_repo(tmp_path):
    repo = JsonFileNoteRepository(tmp_path / "data" / "notes.json")
    repo.ensure_directory()
    return repo


@pytest.fixture
def json_store(json_repo, clock):
    return NoteStore(json_repo, clock=clock)


@pytest.fixture
def auth_header():
    """Build an Authorization header for a secret, issued now."""
    def _build(secret: str = "p1") -> dict[str, str]:
        return {"Authorization": f"Bearer {encode_token(secret)}"}
    return _build


@pytest.fixture
async def client(store):
    """FastAPI test client with the note store overridden."""
    app.dependency_overrides[get_note_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
