"""Boundary Protocols - contracts between the note store and persistence engines.

Invariants:
    - NoteStore NEVER imports a concrete repository; engines are injected
    - store() replaces one user's record and leaves every other entry untouched
    - Engines raise StorageError (core/errors.py) for IO or corruption failures

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from typing import Protocol

from notesync.core.domain_types import UserId, UserRecord


class NoteRepository(Protocol):
    """Contract for per-user note persistence - implemented by infrastructure."""
    async def load(self, user_id: UserId) -> UserRecord | None: ...
    async def store(self, user_id: UserId, record: UserRecord) -> None: ...
