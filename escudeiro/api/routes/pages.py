"""
Page Routes
===========

FastAPI routes for pages rendered by the server itself.
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from escudeiro.core.rendering.page_renderer import render_squire_page

router = APIRouter(tags=["Pages"])


@router.get("/squire", response_class=HTMLResponse)
async def squire_page() -> HTMLResponse:
    """Render the Squire's Page."""
    return HTMLResponse(content=render_squire_page())
