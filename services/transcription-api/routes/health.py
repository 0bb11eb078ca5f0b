"""Liveness endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from transcriber_common import SERVICE_NAME

from response_models import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        service=SERVICE_NAME,
    )
