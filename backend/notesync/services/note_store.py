"""Note Store - read-modify-write of per-user records with last-write-wins.

Invariants:
    - Validation happens before any repository call
    - Every write's read → decide → store runs under one asyncio.Lock, so
      concurrent writers never lose an update and never drop another user's entry
    - The stored timestamp is always the server's write time; the client
      timestamp only gates the write
    - Reading an unknown user returns {notes: [], timestamp: now} and persists nothing

Design Decisions:
    - Single global lock over per-key locks: the JSON backend rewrites the whole
      mapping, so writes for different users share one resource anyway
    - Reads skip the lock: repositories swap state atomically
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Callable

from notesync.core.domain_types import UserId, UserRecord, WriteOutcome
from notesync.core.errors import ValidationError
from notesync.core.merge import (
    coerce_candidate_timestamp, format_instant, should_apply, utc_now,
)
from notesync.core.repository_protocols import NoteRepository

logger = logging.getLogger(__name__)


class NoteStore:
    """Multi-tenant note store over an injected NoteRepository."""

    def __init__(
        self,
        repository: NoteRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repository = repository
        self._clock = clock
        self._write_lock = asyncio.Lock()

    def _empty_record(self) -> UserRecord:
        return UserRecord(notes=[], timestamp=format_instant(self._clock()))

    async def read(self, user_id: UserId) -> UserRecord:
        record = await self.repository.load(user_id)
        return record if record is not None else self._empty_record()

    async def write(
        self,
        user_id: UserId,
        notes: Any,
        timestamp: str | int | float | datetime | None = None,
    ) -> UserRecord:
        """Persist notes unless a newer-or-equal record is already stored.

        Returns the record that is stored after the call, which is the
        pre-existing one when the write is stale.
        """
        if not isinstance(notes, list):
            raise ValidationError("notes must be an array", field="notes")
        candidate_ts = coerce_candidate_timestamp(timestamp)

        async with self._write_lock:
            existing = await self.repository.load(user_id)
            existing_ts = existing.timestamp if existing is not None else None

            if existing is not None and not should_apply(existing_ts, candidate_ts):
                logger.info(
                    f"Stale write ignored (client {format_instant(candidate_ts)}"
                    f" <= stored {existing_ts})",
                    extra={"user_id": user_id, "outcome": WriteOutcome.STALE.value},
                )
                return existing

            record = UserRecord(
                notes=list(notes), timestamp=format_instant(self._clock()),
            )
            await self.repository.store(user_id, record)

        logger.info(
            f"Stored {len(record.notes)} note(s)",
            extra={"user_id": user_id, "outcome": WriteOutcome.APPLIED.value},
        )
        return record

    # ─── Public entry shapes ──────────────────────────────────────

    async def sync(
        self,
        user_id: UserId,
        notes: Any,
        timestamp: str | int | float | datetime | None,
    ) -> UserRecord:
        """Push-with-merge."""
        return await self.write(user_id, notes, timestamp)

    async def save(self, user_id: UserId, notes: Any) -> UserRecord:
        """Unconditional overwrite."""
        return await self.write(user_id, notes, None)

    async def get(self, user_id: UserId) -> UserRecord:
        return await self.read(user_id)
