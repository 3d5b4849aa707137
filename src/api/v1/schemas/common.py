"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class ServiceInfoResponse(BaseModel):
    """Landing document: what this service is and where to go next."""

    name: str
    version: str
    links: dict[str, str]
