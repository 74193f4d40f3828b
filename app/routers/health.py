# =============================================================================
# app/routers/health.py - Health Check Endpoint
# =============================================================================
# Liveness probe for monitoring and load balancers. Never calls Sendbird.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()

SERVICE_NAME = "SendBird API Server"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    service: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Check if the server is running properly.
    """
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
        service=SERVICE_NAME,
    )
