"""Integration tests for the SQLAlchemy repositories and unit of work."""

from uuid import uuid4

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import GoalNotFoundError, StoreError, UsernameTakenError
from domain.entities.goal import OneTimeGoal, ProgressGoal, create_goal
from domain.entities.profile import Profile
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


@pytest.fixture
def uow_factory(session_factory: async_sessionmaker[AsyncSession]):
    return lambda: SQLAlchemyUnitOfWork(session_factory)


async def _add_profile(uow_factory, username: str = "janedoe") -> Profile:
    async with uow_factory() as uow:
        profile = await uow.profiles.create(Profile(id=uuid4(), username=username))
        await uow.commit()
    return profile


class TestProfileRepository:
    @pytest.mark.asyncio
    async def test_get_by_username_ignores_case(self, uow_factory) -> None:
        created = await _add_profile(uow_factory)

        async with uow_factory() as uow:
            found = await uow.profiles.get_by_username("JANEDOE")

        assert found is not None
        assert found.id == created.id

    @pytest.mark.asyncio
    async def test_duplicate_username_raises_taken(self, uow_factory) -> None:
        await _add_profile(uow_factory, "janedoe")

        with pytest.raises(UsernameTakenError):
            await _add_profile(uow_factory, "janedoe")

    @pytest.mark.asyncio
    async def test_missing_profile(self, uow_factory) -> None:
        async with uow_factory() as uow:
            assert await uow.profiles.get(uuid4()) is None


class TestGoalRepository:
    @pytest.mark.asyncio
    async def test_round_trips_each_variant(self, uow_factory) -> None:
        profile = await _add_profile(uow_factory)
        async with uow_factory() as uow:
            one_time = await uow.goals.create(create_goal(profile.id, "Visit Japan", "one_time", 2026))
            progress = await uow.goals.create(create_goal(profile.id, "Read", "progress", 2026))
            await uow.commit()

        async with uow_factory() as uow:
            loaded_one_time = await uow.goals.get(one_time.id)
            loaded_progress = await uow.goals.get(progress.id)

        assert isinstance(loaded_one_time, OneTimeGoal)
        assert isinstance(loaded_progress, ProgressGoal)

    @pytest.mark.asyncio
    async def test_update_persists_state(self, uow_factory) -> None:
        profile = await _add_profile(uow_factory)
        async with uow_factory() as uow:
            goal = await uow.goals.create(create_goal(profile.id, "Read", "progress", 2026))
            await uow.commit()

        async with uow_factory() as uow:
            stored = await uow.goals.get(goal.id)
            assert isinstance(stored, ProgressGoal)
            stored.set_progress(100)
            await uow.goals.update(stored)
            await uow.commit()

        async with uow_factory() as uow:
            reloaded = await uow.goals.get(goal.id)

        assert reloaded is not None
        assert (reloaded.progress, reloaded.is_completed) == (100, True)

    @pytest.mark.asyncio
    async def test_filters_by_user_and_year(self, uow_factory) -> None:
        jane = await _add_profile(uow_factory, "janedoe")
        bob = await _add_profile(uow_factory, "bobby")
        async with uow_factory() as uow:
            await uow.goals.create(create_goal(jane.id, "Jane 2026", "one_time", 2026))
            await uow.goals.create(create_goal(jane.id, "Jane 2025", "one_time", 2025))
            await uow.goals.create(create_goal(bob.id, "Bob 2026", "one_time", 2026))
            await uow.commit()

        async with uow_factory() as uow:
            goals = await uow.goals.get_for_user_year(jane.id, 2026)

        assert [goal.title for goal in goals] == ["Jane 2026"]

    @pytest.mark.asyncio
    async def test_uncommitted_work_is_discarded(self, uow_factory) -> None:
        profile = await _add_profile(uow_factory)
        async with uow_factory() as uow:
            goal = await uow.goals.create(create_goal(profile.id, "Draft", "one_time", 2026))

        async with uow_factory() as uow:
            assert await uow.goals.get(goal.id) is None

    @pytest.mark.asyncio
    async def test_update_of_deleted_goal_is_not_found(self, uow_factory) -> None:
        profile = await _add_profile(uow_factory)
        async with uow_factory() as uow:
            goal = await uow.goals.create(create_goal(profile.id, "Gone", "one_time", 2026))
            await uow.commit()

        async with uow_factory() as uow:
            stale = await uow.goals.get(goal.id)
        assert isinstance(stale, OneTimeGoal)

        async with uow_factory() as uow:
            await uow.goals.delete(goal.id)
            await uow.commit()

        stale.toggle()
        async with uow_factory() as uow:
            with pytest.raises(GoalNotFoundError) as exc_info:
                await uow.goals.update(stale)

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_goal(self, uow_factory) -> None:
        async with uow_factory() as uow:
            assert await uow.goals.delete(uuid4()) is False


class TestUnitOfWork:
    @pytest.mark.asyncio
    async def test_driver_errors_become_store_errors(self, uow_factory) -> None:
        with pytest.raises(StoreError) as exc_info:
            async with uow_factory() as uow:
                await uow._require_session().execute(text("SELECT * FROM missing_table"))

        assert exc_info.value.status_code == 503

    def test_requires_context_manager(self, uow_factory) -> None:
        with pytest.raises(RuntimeError):
            uow_factory().goals
