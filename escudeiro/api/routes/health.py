"""
Health Routes
=============

FastAPI routes for health check endpoints.
"""

from fastapi import APIRouter, Depends, Request

from escudeiro.api.dependencies import get_current_settings
from escudeiro.config.settings import Settings
from escudeiro.models.schemas import HealthStatus

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthStatus)
async def health_check(
    request: Request, settings: Settings = Depends(get_current_settings)
) -> HealthStatus:
    """Basic health check endpoint."""
    web_root = getattr(request.app.state, "web_root", None)
    return HealthStatus(
        status="healthy" if web_root is not None else "unhealthy",
        version=settings.app_version,
        web_root=str(web_root.root) if web_root is not None else None,
        proxy_enabled=settings.proxy_enabled,
    )
