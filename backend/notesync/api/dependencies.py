"""Route Dependencies - identity resolution and note store lookup.

Invariants:
    - Authentication runs as a dependency, so a bad token is rejected (401)
      before the request body is validated (400)
    - The NoteStore lives on app.state; tests swap it there
"""

from fastapi import Depends, Header, Request

from notesync.config import Settings, get_settings
from notesync.core.domain_types import Identity
from notesync.core.identity import decode_token
from notesync.services.note_store import NoteStore


async def get_identity(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> Identity:
    return decode_token(authorization, max_age=settings.token_max_age)


def get_note_store(request: Request) -> NoteStore:
    store = getattr(request.app.state, "note_store", None)
    if store is None:
        raise RuntimeError("Note store not initialized")
    return store
