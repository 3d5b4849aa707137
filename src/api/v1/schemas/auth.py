"""Pydantic schemas for the account endpoints."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _check_email(v: str) -> str:
    v = v.strip().lower()
    if "@" not in v or "." not in v.split("@")[-1]:
        raise ValueError("Invalid email address")
    return v


class SignUpRequest(BaseModel):
    """Schema for creating an account."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "janedoe",
                "email": "jane@example.com",
                "password": "correct-horse",
            }
        },
    )

    username: str = Field(..., min_length=3, max_length=30)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Basic email validation."""
        return _check_email(v)


class SignInRequest(BaseModel):
    """Schema for signing in with email and password."""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Basic email validation."""
        return _check_email(v)


class SessionResponse(BaseModel):
    """Access token issued by the identity provider."""

    access_token: str
    token_type: str = "bearer"
    refresh_token: str | None = None
    expires_in: int | None = None
    user_id: UUID


class SignUpResponse(BaseModel):
    """Schema for a completed sign-up.

    ``session`` is null while the provider waits for email confirmation.
    """

    user_id: UUID
    username: str
    email: str
    session: SessionResponse | None = None


class CurrentSessionResponse(BaseModel):
    """Who the bearer token belongs to, if anyone."""

    authenticated: bool
    user_id: UUID | None = None
    email: str | None = None
    username: str | None = None
