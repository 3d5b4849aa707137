"""Public, read-only profile pages."""

from collections.abc import Callable
from dataclasses import dataclass

from core.exceptions import ProfileNotFoundError, ValidationError
from domain.entities.goal import Goal
from domain.entities.profile import Profile, normalize_username
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.aggregation import GoalSummary, summarize
from domain.services.clock import Clock


@dataclass(frozen=True)
class PublicProfile:
    """What anyone can see about a user: their current-year goals."""

    profile: Profile
    year: int
    goals: list[Goal]
    summary: GoalSummary


class ProfileService:
    """Service layer for public profile lookups."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork], clock: Clock | None = None) -> None:
        self._uow_factory = uow_factory
        self._clock = clock or Clock()

    async def public_profile(self, username: str) -> PublicProfile:
        """Look a profile up by username, ignoring case.

        Raises:
            ProfileNotFoundError: If no profile has that username, or the
                username could never have been registered.
        """
        try:
            normalized = normalize_username(username)
        except ValidationError:
            raise ProfileNotFoundError(username) from None

        year = self._clock.current_year()
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_username(normalized)
            if not profile:
                raise ProfileNotFoundError(username)
            goals = await uow.goals.get_for_user_year(profile.id, year)

        return PublicProfile(profile=profile, year=year, goals=goals, summary=summarize(goals))
