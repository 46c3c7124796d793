"""User Repository — lookups and explicit writes for the users table."""

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from jarbas.core.domain_types import UserId
from jarbas.models.user import User


class UserRepository:
    """Persistence operations for User (profile eager-loaded via selectin)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: UserId) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists(self, user_id: UserId) -> bool:
        return bool(await self.db.scalar(
            select(exists().where(User.id == user_id)),
        ))

    async def email_taken(
        self, email: str, exclude_id: UserId | None = None,
    ) -> bool:
        """True if another user already holds email."""
        condition = User.email == email
        if exclude_id is not None:
            condition = condition & (User.id != exclude_id)
        return bool(await self.db.scalar(select(exists().where(condition))))

    async def insert(self, user: User) -> User:
        self.db.add(user)
        await self.db.flush()
        return user

    async def update_fields(self, user: User, **fields: object) -> User:
        """Write exactly the given columns."""
        for name, value in fields.items():
            setattr(user, name, value)
        await self.db.flush()
        return user

    async def delete(self, user: User) -> None:
        await self.db.delete(user)
        await self.db.flush()

    async def reload_profile(self, user: User) -> User:
        """Re-read the profile relationship after it was written."""
        await self.db.refresh(user, attribute_names=["profile"])
        return user
