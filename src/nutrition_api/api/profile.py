"""User profile and goal calculation endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from nutrition_api.domain.goals import GoalRequest
from nutrition_api.services.goals import calculate_goals
from nutrition_api.services.profiles import ProfilePayload

if TYPE_CHECKING:
    from nutrition_api.containers import AppContainer

router = APIRouter(prefix="/api/user", tags=["user"])


@router.options("/profile")
@router.options("/calculate-goals")
async def preflight() -> dict[str, object]:
    """Answer CORS preflight requests."""
    return {}


@router.get("/profile")
def read_profile(request: Request) -> dict[str, object]:
    """Return the caller's stored profile."""
    container: AppContainer = request.app.state.container
    user_id = container.identity_resolver.resolve(
        request.headers, request.query_params
    )
    profile = container.profile_service.get_profile(user_id)
    return {"success": True, "profile": profile.model_dump(mode="json")}


@router.post("/profile")
def write_profile(payload: ProfilePayload, request: Request) -> JSONResponse:
    """Create or replace a profile."""
    container: AppContainer = request.app.state.container
    if not payload.user_id:
        user_id = container.identity_resolver.resolve(
            request.headers, request.query_params
        )
        payload = payload.model_copy(update={"user_id": user_id})
    saved = container.profile_service.save_profile(payload)
    return JSONResponse(
        status_code=(status.HTTP_201_CREATED if saved.created else status.HTTP_200_OK),
        content={
            "success": True,
            "profile": saved.profile.model_dump(mode="json"),
            "message": saved.message,
        },
    )


@router.post("/calculate-goals")
def calculate(payload: GoalRequest) -> dict[str, object]:
    """Return calorie and macro targets for the submitted inputs."""
    calculations = calculate_goals(payload)
    return {"success": True, "calculations": calculations.model_dump(mode="json")}
