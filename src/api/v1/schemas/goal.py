"""Pydantic schemas for Goal API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.goal import Goal, GoalType
from domain.services.aggregation import GoalSummary


class GoalCreate(BaseModel):
    """Schema for creating a Goal."""

    title: str = Field(..., min_length=1, max_length=255)
    goal_type: GoalType = GoalType.ONE_TIME


class GoalProgressUpdate(BaseModel):
    """Schema for setting a progress goal's percentage."""

    progress: int = Field(..., ge=0, le=100, strict=True)


class GoalResponse(BaseModel):
    """Schema for Goal response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Read 12 books",
                "goal_type": "progress",
                "progress": 45,
                "is_completed": False,
                "year": 2026,
                "created_at": "2026-01-03T10:00:00",
                "updated_at": "2026-03-14T18:30:00",
            }
        },
    )

    id: UUID
    title: str
    goal_type: GoalType
    progress: int
    is_completed: bool
    year: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, goal: Goal) -> "GoalResponse":
        return cls(
            id=goal.id,
            title=goal.title,
            goal_type=goal.goal_type,
            progress=goal.progress,
            is_completed=goal.is_completed,
            year=goal.year,
            created_at=goal.created_at,
            updated_at=goal.updated_at,
        )


class GoalListResponse(BaseModel):
    """Schema for list of Goals."""

    data: list[GoalResponse]


class GoalDetailResponse(BaseModel):
    """Schema for single Goal."""

    data: GoalResponse


class SummaryResponse(BaseModel):
    """Completion count and mean progress of a goal collection."""

    total: int
    completed: int
    overall_progress: int

    @classmethod
    def from_summary(cls, summary: GoalSummary) -> "SummaryResponse":
        return cls(
            total=summary.total,
            completed=summary.completed,
            overall_progress=summary.overall_progress,
        )


class DashboardData(BaseModel):
    """The owner's private view."""

    username: str
    email: str
    year: int
    summary: SummaryResponse
    goals: list[GoalResponse]


class DashboardResponse(BaseModel):
    """Schema for the dashboard."""

    data: DashboardData
