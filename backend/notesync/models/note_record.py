"""NoteRecord ORM - one row per user id for the database storage backend.

Invariants:
    - user_id is the 16-hex-char digest of the user's secret (primary key)
    - notes holds the client's array as-is (JSON column)
    - timestamp keeps the server-stamped ISO string, same format as the JSON file
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from notesync.db.base import Base


class NoteRecord(Base):
    __tablename__ = "note_records"

    user_id: Mapped[str] = mapped_column(String(16), primary_key=True)
    notes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    timestamp: Mapped[str] = mapped_column(String(32), nullable=False)
