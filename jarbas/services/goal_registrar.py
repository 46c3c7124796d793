"""Goal Registrar — goal CRUD with referential checks on creation.

Invariants:
    - create_goal: user checked first, then currency; nothing written unless both exist
    - update_goal: path id must equal body id; user/currency are not re-validated
    - update_goal that affects zero rows re-checks existence: gone -> GoalNotFoundError,
      still there -> ConcurrencyError
    - Deleting a goal never touches the referenced user or currency
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from jarbas.core.domain_types import GoalId, UserId
from jarbas.core.errors import (
    ConcurrencyError, CurrencyNotFoundError, ErrorContext, GoalNotFoundError,
    IdentifierMismatchError, UserNotFoundError,
)
from jarbas.infrastructure.database import transaction
from jarbas.models.goal import Goal
from jarbas.repositories.goal_repository import CurrencyRepository, GoalRepository
from jarbas.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class GoalRegistrar:
    """Goal lifecycle."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.goals = GoalRepository(db)
        self.users = UserRepository(db)
        self.currencies = CurrencyRepository(db)

    async def create_goal(self, fields: dict) -> Goal:
        user_id = fields["user_id"]
        currency_id = fields["currency_id"]
        if not await self.users.exists(user_id):
            raise UserNotFoundError(str(user_id))
        if not await self.currencies.exists(currency_id):
            raise CurrencyNotFoundError(
                currency_id, ErrorContext(user_id=str(user_id)),
            )

        goal = Goal(**fields)
        async with transaction(self.db):
            await self.goals.insert(goal)
        logger.info(
            f"Goal {goal.id} created",
            extra={"user_id": user_id, "goal_id": goal.id},
        )
        return goal

    async def get_goal(self, goal_id: GoalId) -> Goal:
        goal = await self.goals.get(goal_id)
        if goal is None:
            raise GoalNotFoundError(goal_id)
        return goal

    async def list_goals(self, user_id: UserId) -> list[Goal]:
        if not await self.users.exists(user_id):
            raise UserNotFoundError(str(user_id))
        return await self.goals.list_by_user(user_id)

    async def update_goal(self, goal_id: GoalId, body_id: GoalId, fields: dict) -> None:
        """Replace the editable fields of goal_id."""
        if goal_id != body_id:
            raise IdentifierMismatchError(goal_id, body_id)

        async with transaction(self.db):
            affected = await self.goals.replace(goal_id, **fields)
        if affected:
            logger.info(f"Goal {goal_id} updated", extra={"goal_id": goal_id})
            return

        if await self.goals.exists(goal_id):
            raise ConcurrencyError(
                f"Goal '{goal_id}' was modified concurrently",
                ErrorContext(goal_id=goal_id),
            )
        raise GoalNotFoundError(goal_id)

    async def delete_goal(self, goal_id: GoalId) -> Goal:
        goal = await self.get_goal(goal_id)
        async with transaction(self.db):
            await self.goals.delete(goal)
        logger.info(f"Goal {goal_id} deleted", extra={"goal_id": goal_id})
        return goal
