"""Pydantic schemas for public profiles."""

from datetime import datetime

from pydantic import BaseModel

from api.v1.schemas.goal import GoalResponse, SummaryResponse


class PublicProfileData(BaseModel):
    """Read-only view of a user's current-year goals. No email."""

    username: str
    member_since: datetime
    year: int
    summary: SummaryResponse
    goals: list[GoalResponse]


class PublicProfileResponse(BaseModel):
    """Schema for a public profile."""

    data: PublicProfileData
