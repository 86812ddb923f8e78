"""JSON File Repository - the whole user mapping in one pretty-printed JSON file.

Invariants:
    - A missing file is an empty mapping, never an error
    - Non-object JSON, undecodable bytes, or a malformed entry raise StorageError
    - store() rewrites the full mapping through a temp file + os.replace, so
      readers see either the old or the new file, never a partial one
    - Blocking file IO runs in a worker thread

Design Decisions:
    - Layout of data/notes.json: {userId: {notes, timestamp}}
    - store() is read-modify-write over the whole file; callers serialize writes
      (NoteStore holds the write lock)
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from notesync.core.domain_types import UserId, UserRecord
from notesync.core.errors import ErrorContext, StorageError

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


class JsonFileNoteRepository:
    """NoteRepository backed by a single JSON file."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def ensure_directory(self) -> Path:
        """Create the parent directory. Failure propagates (fatal at startup)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        return self.path.parent

    # ─── Blocking helpers (run in a thread) ──────────────────────

    def _read_mapping(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read {self.path}: {e}", extra={"operation": "read"})
            raise StorageError("cannot read notes file", "read")

        try:
            mapping = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt notes file {self.path}: {e}", extra={"operation": "read"})
            raise StorageError("notes file is not valid JSON", "read")

        if not isinstance(mapping, dict):
            raise StorageError("notes file does not hold an object", "read")
        return mapping

    def _write_mapping(self, mapping: dict[str, Any]) -> None:
        payload = json.dumps(mapping, indent=2, ensure_ascii=False)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            # mkstemp creates 0600
            os.chmod(tmp_name, FILE_MODE)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            logger.error(f"Cannot write {self.path}: {e}", extra={"operation": "write"})
            raise StorageError("cannot write notes file", "write")

    def _load_sync(self, user_id: UserId) -> UserRecord | None:
        entry = self._read_mapping().get(user_id)
        if entry is None:
            return None
        try:
            return UserRecord.from_dict(entry)
        except ValueError as e:
            raise StorageError(
                str(e), "read", ErrorContext(user_id=user_id),
            )

    def _store_sync(self, user_id: UserId, record: UserRecord) -> None:
        mapping = self._read_mapping()
        mapping[user_id] = record.to_dict()
        self._write_mapping(mapping)

    # ─── NoteRepository ──────────────────────────────────────────

    async def load(self, user_id: UserId) -> UserRecord | None:
        return await asyncio.to_thread(self._load_sync, user_id)

    async def store(self, user_id: UserId, record: UserRecord) -> None:
        await asyncio.to_thread(self._store_sync, user_id, record)
