"""Year-progress countdown."""

from fastapi import APIRouter, Depends, Query, Request

from api.v1.dependencies import get_clock
from api.v1.schemas.year_progress import YearProgressResponse
from core.config import settings
from core.rate_limit import READ_LIMIT, limiter
from domain.services.clock import Clock

router = APIRouter(prefix="/year-progress", tags=["year-progress"])


@router.get("", response_model=YearProgressResponse, summary="How much of the year is gone")
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_year_progress(
    request: Request,
    year: int | None = Query(None, ge=1, le=9999, description="Defaults to the current year"),
    clock: Clock = Depends(get_clock),
) -> YearProgressResponse:
    """Elapsed percentage and days/hours/minutes/seconds since January 1st."""
    progress = clock.year_progress(year)
    return YearProgressResponse(
        year=progress.year,
        percent=progress.percent,
        display=progress.display,
        days=progress.days,
        hours=progress.hours,
        minutes=progress.minutes,
        seconds=progress.seconds,
        poll_interval_ms=settings.year_progress_poll_interval_ms,
    )
