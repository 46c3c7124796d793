"""Goal Schemas — creation, full replacement and response.

Invariants:
    - target_amount > 0, at most 2 decimal places
    - GoalUpdate carries its own id; the route compares it with the path id
    - user_id and currency_id are fixed at creation (not part of GoalUpdate)
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GoalFields(BaseModel):
    """Editable goal fields."""
    title: str = Field(min_length=1, max_length=120)
    description: str | None = Field(None, max_length=2000)
    target_amount: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    target_date: date | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


class GoalCreate(GoalFields):
    user_id: UUID
    currency_id: int


class GoalUpdate(GoalFields):
    id: int


class GoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: UUID
    currency_id: int
    title: str
    description: str | None
    target_amount: Decimal
    target_date: date | None
    created_at: datetime
