"""Note Routes - push-with-merge, fetch, and unconditional save.

Invariants:
    - Every route resolves the caller's identity before touching the store
    - Routes never contain merge logic (delegated to NoteStore)
    - Responses are the stored {notes, timestamp} pair
"""

import logging

from fastapi import APIRouter, Depends

from notesync.api.dependencies import get_identity, get_note_store
from notesync.core.domain_types import Identity
from notesync.schemas.notes import (
    SaveNotesRequest, SyncNotesRequest, UserRecordResponse,
)
from notesync.services.note_store import NoteStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["notes"])


@router.post("/sync-notes", response_model=UserRecordResponse)
async def sync_notes(
    body: SyncNotesRequest,
    identity: Identity = Depends(get_identity),
    store: NoteStore = Depends(get_note_store),
):
    """Push notes; kept only if newer than what the server holds."""
    record = await store.sync(identity.user_id, body.notes, body.timestamp)
    return UserRecordResponse.from_record(record)


@router.get("/notes", response_model=UserRecordResponse)
async def get_notes(
    identity: Identity = Depends(get_identity),
    store: NoteStore = Depends(get_note_store),
):
    record = await store.get(identity.user_id)
    return UserRecordResponse.from_record(record)


@router.post("/notes", response_model=UserRecordResponse)
async def save_notes(
    body: SaveNotesRequest,
    identity: Identity = Depends(get_identity),
    store: NoteStore = Depends(get_note_store),
):
    """Overwrite the caller's notes regardless of timestamps."""
    record = await store.save(identity.user_id, body.notes)
    return UserRecordResponse.from_record(record)
