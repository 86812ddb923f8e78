"""Test doubles - in-memory repository, failing repositories, and a settable clock.

Invariants:
    - InMemoryNoteRepository counts every load/store so tests can assert
      that validation failures never reach storage
    - load() yields to the event loop, so concurrent writers interleave
      exactly where a real IO-bound repository would
"""

import asyncio
from datetime import datetime, timedelta, timezone

from notesync.core.domain_types import UserId, UserRecord
from notesync.core.errors import StorageError


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class InMemoryNoteRepository:
    def __init__(self, records: dict[str, UserRecord] | None = None):
        self.records: dict[str, UserRecord] = dict(records or {})
        self.loads = 0
        self.stores = 0

    async def load(self, user_id: UserId) -> UserRecord | None:
        self.loads += 1
        await asyncio.sleep(0)
        return self.records.get(user_id)

    async def store(self, user_id: UserId, record: UserRecord) -> None:
        self.stores += 1
        await asyncio.sleep(0)
        self.records[user_id] = record


class BrokenStorageRepository:
    """Every call fails the way a corrupt file or dead disk would."""

    async def load(self, user_id: UserId) -> UserRecord | None:
        raise StorageError("notes file is not valid JSON", "read")

    async def store(self, user_id: UserId, record: UserRecord) -> None:
        raise StorageError("cannot write notes file", "write")


class ExplodingRepository:
    """Raises an exception outside the NoteSync hierarchy."""

    async def load(self, user_id: UserId) -> UserRecord | None:
        raise RuntimeError("disk controller on fire: /var/lib/secret/path")

    async def store(self, user_id: UserId, record: UserRecord) -> None:
        raise RuntimeError("disk controller on fire: /var/lib/secret/path")
