"""Goal and Currency Repositories — goal CRUD and currency existence checks."""

from sqlalchemy import exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from jarbas.core.domain_types import CurrencyId, GoalId, UserId
from jarbas.models.currency import Currency
from jarbas.models.goal import Goal


class GoalRepository:
    """Persistence operations for Goal."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, goal_id: GoalId) -> Goal | None:
        result = await self.db.execute(select(Goal).where(Goal.id == goal_id))
        return result.scalar_one_or_none()

    async def exists(self, goal_id: GoalId) -> bool:
        return bool(await self.db.scalar(
            select(exists().where(Goal.id == goal_id)),
        ))

    async def list_by_user(self, user_id: UserId) -> list[Goal]:
        result = await self.db.execute(
            select(Goal)
            .where(Goal.user_id == user_id)
            .order_by(Goal.created_at, Goal.id),
        )
        return list(result.scalars().all())

    async def insert(self, goal: Goal) -> Goal:
        self.db.add(goal)
        await self.db.flush()
        return goal

    async def replace(self, goal_id: GoalId, **fields: object) -> int:
        """UPDATE the row in one statement; returns affected row count."""
        result = await self.db.execute(
            update(Goal).where(Goal.id == goal_id).values(**fields),
        )
        return result.rowcount

    async def delete(self, goal: Goal) -> None:
        await self.db.delete(goal)
        await self.db.flush()


class CurrencyRepository:
    """Read-only access to Currency."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, currency_id: CurrencyId) -> bool:
        return bool(await self.db.scalar(
            select(exists().where(Currency.id == currency_id)),
        ))
