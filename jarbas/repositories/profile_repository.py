"""Profile Repository — explicit writes for the profiles table.

Invariants:
    - update_fields mutates the existing row; the primary key is never reassigned
    - load_currency is the only read: the view-only currency join after a write
"""

from sqlalchemy.ext.asyncio import AsyncSession

from jarbas.models.profile import Profile

PROFILE_FIELDS = (
    "target_value", "currency_id", "fixed_income",
    "occupation", "age_range", "time_horizon",
)


class ProfileRepository:
    """Persistence operations for Profile."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, profile: Profile) -> Profile:
        self.db.add(profile)
        await self.db.flush()
        return profile

    async def update_fields(self, profile: Profile, **fields: object) -> Profile:
        """Copy fields onto the existing row, one attribute at a time."""
        unknown = set(fields) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Not profile fields: {sorted(unknown)}")
        for name, value in fields.items():
            setattr(profile, name, value)
        await self.db.flush()
        return profile

    async def delete(self, profile: Profile) -> None:
        await self.db.delete(profile)
        await self.db.flush()

    async def load_currency(self, profile: Profile) -> Profile:
        await self.db.refresh(profile, attribute_names=["currency"])
        return profile
