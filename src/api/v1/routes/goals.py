"""Goal API routes (owner only)."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_goal_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.goal import (
    DashboardData,
    DashboardResponse,
    GoalCreate,
    GoalDetailResponse,
    GoalListResponse,
    GoalProgressUpdate,
    GoalResponse,
    SummaryResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.goal_service import GoalService

router = APIRouter(prefix="/goals", tags=["goals"])
dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@dashboard_router.get(
    "",
    response_model=DashboardResponse,
    summary="Owner dashboard",
    responses={401: {"model": ErrorResponse, "description": "Not signed in"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_dashboard(
    request: Request,
    user: CurrentUser,
    service: GoalService = Depends(get_goal_service),
) -> DashboardResponse:
    """Profile, this year's goals (newest first) and their summary."""
    dashboard = await service.dashboard(user)
    return DashboardResponse(
        data=DashboardData(
            username=dashboard.profile.username,
            email=dashboard.profile.email,
            year=dashboard.year,
            summary=SummaryResponse.from_summary(dashboard.summary),
            goals=[GoalResponse.from_entity(goal) for goal in dashboard.goals],
        )
    )


@router.get(
    "",
    response_model=GoalListResponse,
    summary="List goals",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_goals(
    request: Request,
    user: CurrentUser,
    year: int | None = Query(None, ge=1, le=9999, description="Defaults to the current year"),
    service: GoalService = Depends(get_goal_service),
) -> GoalListResponse:
    """Get the authenticated user's goals for one year, newest first."""
    goals = await service.list_goals(user, year)
    return GoalListResponse(data=[GoalResponse.from_entity(goal) for goal in goals])


@router.post(
    "",
    response_model=GoalDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a goal",
    responses={
        201: {"description": "Goal created at 0% progress"},
        422: {"model": ErrorResponse, "description": "Empty title or unknown goal type"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_goal(
    request: Request,
    body: GoalCreate,
    user: CurrentUser,
    service: GoalService = Depends(get_goal_service),
) -> GoalDetailResponse:
    """Create a goal for the current year."""
    goal = await service.create(user, title=body.title, goal_type=body.goal_type)
    return GoalDetailResponse(data=GoalResponse.from_entity(goal))


@router.post(
    "/{goal_id}/toggle",
    response_model=GoalDetailResponse,
    summary="Toggle a one-time goal",
    responses={
        404: {"model": ErrorResponse, "description": "Goal not found"},
        422: {"model": ErrorResponse, "description": "Goal is a progress goal"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def toggle_goal(
    request: Request,
    goal_id: UUID,
    user: CurrentUser,
    service: GoalService = Depends(get_goal_service),
) -> GoalDetailResponse:
    """Flip a one-time goal between 0% and 100%."""
    goal = await service.toggle(user, goal_id)
    return GoalDetailResponse(data=GoalResponse.from_entity(goal))


@router.put(
    "/{goal_id}/progress",
    response_model=GoalDetailResponse,
    summary="Set progress",
    responses={
        404: {"model": ErrorResponse, "description": "Goal not found"},
        422: {"model": ErrorResponse, "description": "Out of range, or a one-time goal"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def set_goal_progress(
    request: Request,
    goal_id: UUID,
    body: GoalProgressUpdate,
    user: CurrentUser,
    service: GoalService = Depends(get_goal_service),
) -> GoalDetailResponse:
    """Set a progress goal's percentage; 100 completes it."""
    goal = await service.set_progress(user, goal_id, body.progress)
    return GoalDetailResponse(data=GoalResponse.from_entity(goal))


@router.delete(
    "/{goal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a goal",
    responses={404: {"model": ErrorResponse, "description": "Goal not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_goal(
    request: Request,
    goal_id: UUID,
    user: CurrentUser,
    service: GoalService = Depends(get_goal_service),
) -> None:
    """Delete a goal permanently. There is no undo."""
    await service.delete(user, goal_id)
    return None
