"""ORM Models - imported here so Base.metadata knows every table."""

from notesync.models.note_record import NoteRecord  # noqa: F401
