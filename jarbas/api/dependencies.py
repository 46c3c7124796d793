"""Dependency Providers — per-request service construction for FastAPI routes."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jarbas.config import get_settings
from jarbas.core.credential_policy import PasswordPolicy, PolicyCredentialValidator
from jarbas.infrastructure.database import get_db
from jarbas.infrastructure.password_hasher import BcryptHasher
from jarbas.services.goal_registrar import GoalRegistrar
from jarbas.services.identity_manager import IdentityManager


def get_credential_validator() -> PolicyCredentialValidator:
    return PolicyCredentialValidator(PasswordPolicy.from_settings(get_settings()))


def get_credential_hasher() -> BcryptHasher:
    return BcryptHasher(rounds=get_settings().bcrypt_rounds)


def get_identity_manager(
    db: AsyncSession = Depends(get_db),
    validator: PolicyCredentialValidator = Depends(get_credential_validator),
    hasher: BcryptHasher = Depends(get_credential_hasher),
) -> IdentityManager:
    return IdentityManager(db, validator, hasher)


def get_goal_registrar(db: AsyncSession = Depends(get_db)) -> GoalRegistrar:
    return GoalRegistrar(db)
