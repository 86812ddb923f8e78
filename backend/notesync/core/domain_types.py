"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - UserId is always 16 lowercase hex characters (truncated SHA-256)
    - UserRecord.notes is a list; its items are opaque JSON values
    - UserRecord.timestamp is an ISO-8601 UTC string, server-stamped

Design Decisions:
    - NewType for UserId: zero runtime cost, full type-checker support
    - UserRecord is frozen: a write replaces the whole record, never mutates it
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)


@dataclass(frozen=True)
class Identity:
    """Decoded bearer token."""
    user_id: UserId
    secret: str
    issued_at: datetime


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserRecord:
    """The {notes, timestamp} pair stored per user id."""
    notes: list[Any] = field(default_factory=list)
    timestamp: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"notes": list(self.notes), "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: Any) -> "UserRecord":
        """Build from persisted data. Raises ValueError on a malformed entry."""
        if not isinstance(data, dict):
            raise ValueError("record is not an object")
        notes = data.get("notes", [])
        timestamp = data.get("timestamp")
        if not isinstance(notes, list):
            raise ValueError("record notes is not an array")
        if not isinstance(timestamp, str):
            raise ValueError("record timestamp is not a string")
        return cls(notes=notes, timestamp=timestamp)


# ─── Enums ───────────────────────────────────────────────────────

class StorageBackend(str, Enum):
    """Persistence engines selectable from settings."""
    FILE = "file"
    DATABASE = "database"


class WriteOutcome(str, Enum):
    """What a write did - surfaced in logs."""
    APPLIED = "applied"
    STALE = "stale"
