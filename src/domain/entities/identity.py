"""Authenticated identity passed explicitly into every private operation."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Identity:
    """Who is making the request, as vouched for by the identity provider."""

    id: UUID
    email: str
    username: str | None = None
    role: str | None = None
