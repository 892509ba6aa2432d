"""Health check endpoints."""

from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel

from sales_dashboard.core.config import get_settings
from sales_dashboard.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["ok", "degraded", "unhealthy"]
    upstream: str
    webhook_configured: bool


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe.

    Does not contact the upstream API; it only reports which upstream the
    proxy is configured to read from.
    """
    settings = get_settings()
    logger.debug("health.check_started")
    return HealthResponse(
        status="ok",
        upstream=settings.upstream_base_url,
        webhook_configured=settings.webhook_enabled,
    )
