"""SQLAlchemy implementation of Goal repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import GoalNotFoundError
from domain.entities.goal import Goal, GoalType, OneTimeGoal, ProgressGoal
from infrastructure.database.models import GoalModel


class SQLAlchemyGoalRepository:
    """SQLAlchemy implementation of IGoalRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Goal | None:
        """Get a goal by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_for_user_year(self, user_id: UUID, year: int) -> list[Goal]:
        """Get a user's goals for one year, newest first."""
        stmt = (
            select(GoalModel)
            .where(GoalModel.user_id == user_id, GoalModel.year == year)
            .order_by(GoalModel.created_at.desc(), GoalModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, goal: Goal) -> Goal:
        """Create a new goal."""
        model = self._to_model(goal)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, goal: Goal) -> Goal:
        """Partial update: only progress, is_completed and updated_at are written.

        Raises:
            GoalNotFoundError: If the row was deleted since it was read.
        """
        model = await self._get_model(goal.id)
        if not model:
            raise GoalNotFoundError(str(goal.id))

        model.progress = goal.progress
        model.is_completed = goal.is_completed
        model.updated_at = goal.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a goal."""
        model = await self._get_model(id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _get_model(self, id: UUID) -> GoalModel | None:
        stmt = select(GoalModel).where(GoalModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: GoalModel) -> Goal:
        """Rebuild the goal variant named by the row's goal_type."""
        if model.goal_type == GoalType.ONE_TIME:
            return OneTimeGoal(
                id=model.id,
                user_id=model.user_id,
                title=model.title,
                year=model.year,
                is_completed=model.is_completed,
                created_at=model.created_at,
                updated_at=model.updated_at,
            )
        return ProgressGoal(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            year=model.year,
            progress=model.progress,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Goal) -> GoalModel:
        """Convert domain entity to ORM model."""
        return GoalModel(
            id=entity.id,
            user_id=entity.user_id,
            title=entity.title,
            goal_type=entity.goal_type.value,
            progress=entity.progress,
            is_completed=entity.is_completed,
            year=entity.year,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
