"""Profile domain entity."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from core.exceptions import ErrorCode, ValidationError

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


def normalize_username(raw: str) -> str:
    """Validate a username and return its stored (lowercase) form.

    Raises:
        ValidationError: If the username is too short, too long, or contains
            characters other than letters, digits and underscores.
    """
    username = raw.strip()
    if len(username) < USERNAME_MIN_LENGTH:
        raise ValidationError(
            f"Username must be at least {USERNAME_MIN_LENGTH} characters",
            ErrorCode.INVALID_USERNAME,
        )
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"Username must be at most {USERNAME_MAX_LENGTH} characters",
            ErrorCode.INVALID_USERNAME,
        )
    if not USERNAME_PATTERN.match(username):
        raise ValidationError(
            "Username can only contain letters, numbers, and underscores",
            ErrorCode.INVALID_USERNAME,
        )
    return username.lower()


@dataclass
class Profile:
    """Public face of an account. Created once at sign-up, never renamed."""

    id: UUID
    username: str
    email: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
