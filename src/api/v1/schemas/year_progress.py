"""Pydantic schemas for the year-progress clock."""

from pydantic import BaseModel


class YearProgressResponse(BaseModel):
    """Elapsed share of the year, ready for a live countdown."""

    year: int
    percent: float
    display: str
    days: int
    hours: int
    minutes: int
    seconds: int
    poll_interval_ms: int
