# backend/luz/routes/health.py
"""
Health check endpoints for monitoring and load balancer probes.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Response

from ..schemas.base import StrictModel
from ..monitoring.prometheus_metrics import prometheus_metrics

router = APIRouter(tags=["health"])


class HealthResponse(StrictModel):
    status: str
    timestamp: str


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Does not touch the database; used for high-frequency probes.
    """
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )


@router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    """Prometheus exposition of the application registry."""
    return Response(
        content=prometheus_metrics.get_metrics(),
        media_type=prometheus_metrics.get_content_type(),
    )
