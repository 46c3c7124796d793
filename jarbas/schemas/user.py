"""User Schemas — account and profile payloads.

Invariants:
    - UserUpdate.email / UserUpdate.password: "" and missing mean "unchanged"
    - password max 64 chars keeps bcrypt under its 72-byte input limit for ASCII
    - ProfileUpdate stores enum *values* (use_enum_values) so ORM columns get plain strings
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jarbas.core.domain_types import AgeRange, TimeHorizon


class UserCreate(BaseModel):
    """Registration payload."""
    name: str = Field(min_length=1, max_length=120)
    email: str = Field(min_length=1, max_length=254)
    password: str = Field(min_length=1, max_length=64)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class UserUpdate(BaseModel):
    """Account edit — name always applied, email/password optional."""
    name: str = Field(min_length=1, max_length=120)
    email: str | None = Field(None, max_length=254)
    password: str | None = Field(None, max_length=64)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class CredentialsCheck(BaseModel):
    email: str = Field(min_length=1, max_length=254)
    password: str = Field(min_length=1, max_length=64)


class ProfileUpdate(BaseModel):
    """Full profile payload; every field is copied onto the stored profile."""
    model_config = ConfigDict(use_enum_values=True)

    target_value: Decimal | None = Field(None, ge=0, max_digits=14, decimal_places=2)
    currency_id: int | None = None
    fixed_income: bool = False
    occupation: str | None = Field(None, max_length=120)
    age_range: AgeRange | None = None
    time_horizon: TimeHorizon | None = None


class CurrencyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    symbol: str


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    target_value: Decimal | None
    currency_id: int | None
    currency: CurrencyResponse | None = None
    fixed_income: bool
    occupation: str | None
    age_range: AgeRange | None
    time_horizon: TimeHorizon | None


class UserResponse(BaseModel):
    """Public user data — never includes the password hash."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    username: str
    created_at: datetime
    profile: ProfileResponse | None = None


class MessageResponse(BaseModel):
    message: str
