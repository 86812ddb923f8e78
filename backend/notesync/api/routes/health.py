"""Health Probe - liveness endpoint, no core involvement.

Invariants:
    - GET /health always returns 200 if the process is up
"""

from fastapi import APIRouter, status

from notesync.core.merge import format_instant, utc_now
from notesync.schemas.notes import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health", response_model=HealthResponse, status_code=status.HTTP_200_OK,
)
async def health_check():
    return HealthResponse(status="OK", timestamp=format_instant(utc_now()))
