"""NoteSync API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map NoteSyncError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Storage prepared on startup via lifespan; failure to prepare it aborts startup
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notesync.api.error_handlers import register_error_handlers
from notesync.api.routes import health, notes
from notesync.config import Settings, get_settings
from notesync.core.domain_types import StorageBackend
from notesync.infrastructure.database import close_db, init_db
from notesync.infrastructure.json_file_store import JsonFileNoteRepository
from notesync.infrastructure.observability import setup_logging
from notesync.infrastructure.sql_store import SqlNoteRepository
from notesync.services.note_store import NoteStore

logger = logging.getLogger(__name__)


async def build_note_store(settings: Settings) -> NoteStore:
    """Create the repository selected by settings and wrap it in a NoteStore."""
    if settings.storage_backend is StorageBackend.DATABASE:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        await manager.create_all()
        logger.info(f"Data stored in database: {manager.engine.url!r}")
        return NoteStore(SqlNoteRepository(manager))

    repository = JsonFileNoteRepository(settings.notes_path)
    data_dir = repository.ensure_directory()
    logger.info(f"Data stored in: {data_dir.resolve()}")
    return NoteStore(repository)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    try:
        app.state.note_store = await build_note_store(settings)
    except Exception:
        logger.critical("Failed to start server", exc_info=True)
        raise
    logger.info(f"Notes backend server running on port {settings.port}")
    logger.info(f"Health check: http://localhost:{settings.port}/health")
    yield
    await close_db()
    logger.info("Notes backend shutting down")


app = FastAPI(title="NoteSync API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(notes.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    current = get_settings()
    uvicorn.run(
        "notesync.main:app", host=current.host, port=current.port,
        log_level=current.log_level.lower(),
    )
