"""Goal repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.goal import Goal


class IGoalRepository(Protocol):
    """Repository interface for Goal entities."""

    async def get(self, id: UUID) -> Goal | None:
        """Get a goal by ID."""
        ...

    async def get_for_user_year(self, user_id: UUID, year: int) -> list[Goal]:
        """Get a user's goals for one year, newest first."""
        ...

    async def create(self, goal: Goal) -> Goal:
        """Create a new goal."""
        ...

    async def update(self, goal: Goal) -> Goal:
        """Write back progress, completion and updated_at (last write wins).

        Raises:
            GoalNotFoundError: If the goal no longer exists.
        """
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a goal and return success status."""
        ...
