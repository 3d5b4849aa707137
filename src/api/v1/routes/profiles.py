"""Public profile routes (no authentication)."""

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.goal import GoalResponse, SummaryResponse
from api.v1.schemas.profile import PublicProfileData, PublicProfileResponse
from core.rate_limit import READ_LIMIT, limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/{username}",
    response_model=PublicProfileResponse,
    summary="Public profile",
    responses={404: {"model": ErrorResponse, "description": "Unknown username"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_public_profile(
    request: Request,
    username: str,
    service: ProfileService = Depends(get_profile_service),
) -> PublicProfileResponse:
    """Anyone's current-year goals, looked up by case-insensitive username."""
    public = await service.public_profile(username)
    return PublicProfileResponse(
        data=PublicProfileData(
            username=public.profile.username,
            member_since=public.profile.created_at,
            year=public.year,
            summary=SummaryResponse.from_summary(public.summary),
            goals=[GoalResponse.from_entity(goal) for goal in public.goals],
        )
    )
