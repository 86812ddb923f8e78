"""Note Schemas - Pydantic models for the sync/fetch/save endpoints.

Invariants:
    - notes must be a JSON array; items are opaque
    - SyncNotesRequest.timestamp is optional; empty string means absent
    - Unknown body fields are ignored (clients send extras)
"""

from typing import Any

from pydantic import BaseModel, field_validator

from notesync.core.domain_types import UserRecord


class SaveNotesRequest(BaseModel):
    """Unconditional save body."""
    notes: list[Any]


class SyncNotesRequest(SaveNotesRequest):
    """Push-with-merge body."""
    timestamp: str | int | float | None = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def blank_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class UserRecordResponse(BaseModel):
    """The stored {notes, timestamp} pair."""
    notes: list[Any]
    timestamp: str

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserRecordResponse":
        return cls(notes=list(record.notes), timestamp=record.timestamp)


class HealthResponse(BaseModel):
    status: str
    timestamp: str
