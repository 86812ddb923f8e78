"""SQL Repository - one note_records row per user id.

Invariants:
    - store() touches exactly one row; other users' rows are never read or written
    - Session errors surface as StorageError through DatabaseSessionManager
"""

from sqlalchemy import select

from notesync.core.domain_types import UserId, UserRecord
from notesync.infrastructure.database import DatabaseSessionManager
from notesync.models.note_record import NoteRecord


class SqlNoteRepository:
    """NoteRepository backed by SQLAlchemy async sessions."""

    def __init__(self, manager: DatabaseSessionManager):
        self.manager = manager

    async def load(self, user_id: UserId) -> UserRecord | None:
        async with self.manager.session() as db:
            result = await db.execute(
                select(NoteRecord).where(NoteRecord.user_id == user_id),
            )
            row = result.scalar_one_or_none()
            if row is None:
                return None
            return UserRecord(notes=list(row.notes), timestamp=row.timestamp)

    async def store(self, user_id: UserId, record: UserRecord) -> None:
        async with self.manager.session() as db:
            row = await db.get(NoteRecord, user_id)
            if row is None:
                db.add(NoteRecord(
                    user_id=user_id,
                    notes=list(record.notes),
                    timestamp=record.timestamp,
                ))
            else:
                row.notes = list(record.notes)
                row.timestamp = record.timestamp
            await db.commit()
