"""Photo analysis and ingredient recalculation endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from nutrition_api.api.request_models import AnalyzeRequest, RecalculateRequest

if TYPE_CHECKING:
    from nutrition_api.containers import AppContainer

router = APIRouter(prefix="/api", tags=["analysis"])


@router.options("/analyze")
@router.options("/recalculate")
async def preflight() -> dict[str, object]:
    """Answer CORS preflight requests."""
    return {}


@router.post("/analyze")
async def analyze(payload: AnalyzeRequest, request: Request) -> dict[str, object]:
    """Return a nutrition estimate for a food photo."""
    container: AppContainer = request.app.state.container
    return await container.vision_service.analyze(
        payload.image,
        user_id=payload.user_id,
        timestamp=payload.timestamp,
    )


@router.post("/recalculate")
async def recalculate(
    payload: RecalculateRequest, request: Request
) -> dict[str, object]:
    """Return nutrition totals for an edited ingredient list."""
    container: AppContainer = request.app.state.container
    return await container.recalculation_service.recalculate(payload.ingredientes)
