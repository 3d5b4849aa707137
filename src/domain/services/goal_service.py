"""Goal service layer with business logic."""

from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

import structlog

from core.exceptions import (
    ErrorCode,
    GoalNotFoundError,
    ProfileNotFoundError,
    ValidationError,
)
from domain.entities.goal import Goal, GoalType, OneTimeGoal, ProgressGoal, create_goal
from domain.entities.identity import Identity
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.aggregation import GoalSummary, summarize
from domain.services.clock import Clock

logger = structlog.get_logger()


@dataclass(frozen=True)
class Dashboard:
    """Everything the owner's private view shows."""

    profile: Profile
    year: int
    goals: list[Goal]
    summary: GoalSummary


class GoalService:
    """Service layer for Goal business logic.

    Only the owner may read or change goals through this service; goals that
    belong to someone else are reported as not found.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork], clock: Clock | None = None) -> None:
        self._uow_factory = uow_factory
        self._clock = clock or Clock()

    async def dashboard(self, identity: Identity) -> Dashboard:
        """Profile, current-year goals and their summary for the owner."""
        year = self._clock.current_year()
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(identity.id)
            if not profile:
                raise ProfileNotFoundError(identity.username or str(identity.id))
            goals = await uow.goals.get_for_user_year(identity.id, year)
        return Dashboard(profile=profile, year=year, goals=goals, summary=summarize(goals))

    async def list_goals(self, identity: Identity, year: int | None = None) -> list[Goal]:
        """The owner's goals for ``year`` (default: current year), newest first."""
        if year is None:
            year = self._clock.current_year()
        async with self._uow_factory() as uow:
            return await uow.goals.get_for_user_year(identity.id, year)

    async def create(self, identity: Identity, title: str, goal_type: GoalType | str) -> Goal:
        """Create a goal for the current year at 0% progress."""
        goal = create_goal(identity.id, title, goal_type, self._clock.current_year())
        async with self._uow_factory() as uow:
            created = await uow.goals.create(goal)
            await uow.commit()
        logger.info(
            "goal_created",
            goal_id=str(created.id),
            goal_type=created.goal_type.value,
            year=created.year,
        )
        return created

    async def toggle(self, identity: Identity, goal_id: UUID) -> Goal:
        """Flip a one-time goal between done and not done."""
        async with self._uow_factory() as uow:
            goal = await self._get_owned(uow, identity, goal_id)
            if not isinstance(goal, OneTimeGoal):
                raise ValidationError(
                    "Only one-time goals can be toggled; update progress instead",
                    ErrorCode.GOAL_TYPE_MISMATCH,
                    {"goal_id": str(goal_id), "goal_type": goal.goal_type.value},
                )
            goal.toggle()
            updated = await uow.goals.update(goal)
            await uow.commit()
            return updated

    async def set_progress(self, identity: Identity, goal_id: UUID, progress: int) -> Goal:
        """Set a progress goal's percentage; 100 marks it completed."""
        async with self._uow_factory() as uow:
            goal = await self._get_owned(uow, identity, goal_id)
            if not isinstance(goal, ProgressGoal):
                raise ValidationError(
                    "Only progress goals accept a progress value; toggle instead",
                    ErrorCode.GOAL_TYPE_MISMATCH,
                    {"goal_id": str(goal_id), "goal_type": goal.goal_type.value},
                )
            goal.set_progress(progress)
            updated = await uow.goals.update(goal)
            await uow.commit()
            return updated

    async def delete(self, identity: Identity, goal_id: UUID) -> bool:
        """Delete a goal permanently."""
        async with self._uow_factory() as uow:
            await self._get_owned(uow, identity, goal_id)
            result = await uow.goals.delete(goal_id)
            await uow.commit()
        logger.info("goal_deleted", goal_id=str(goal_id))
        return bool(result)

    async def _get_owned(self, uow: IUnitOfWork, identity: Identity, goal_id: UUID) -> Goal:
        goal = await uow.goals.get(goal_id)
        if not goal or goal.user_id != identity.id:
            raise GoalNotFoundError(str(goal_id))
        return goal
