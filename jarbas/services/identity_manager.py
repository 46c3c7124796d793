"""Identity & Profile Manager — user accounts and their financial profile.

Invariants:
    - Create/Update evaluate every applicable check, aggregate the errors, then decide once
    - Empty string and None are the same for optional email/password ("not provided")
    - A pre-computed password hash is only written when the whole update is accepted
    - Profile edits copy fields onto the existing row; the profile id never changes
    - Profile currency is NOT existence-checked (dangling ids read back as currency=None)
    - delete_user removes the profile first, then the user, in one transaction

Design Decisions:
    - bcrypt runs in a worker thread (asyncio.to_thread): hashing must not stall the event loop
    - Email uniqueness is checked here, format rules live in core/email_policy.py
    - A unique-index hit on commit (two requests past the same uniqueness check)
      is reported as DUPLICATE_EMAIL, the same rejection the check would give
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from jarbas.core.domain_types import UserId
from jarbas.core.email_policy import check_email_format, is_blank, normalize_email
from jarbas.core.errors import (
    ConstraintViolationError, ErrorCategory, ErrorContext,
    InvalidCredentialsError, RejectedError, RejectionSet, UserNotFoundError,
)
from jarbas.core.repository_protocols import CredentialHasher, CredentialValidator
from jarbas.infrastructure.database import transaction
from jarbas.models.profile import Profile
from jarbas.models.user import User
from jarbas.repositories.profile_repository import ProfileRepository
from jarbas.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class IdentityManager:
    """User and Profile lifecycle."""

    def __init__(
        self,
        db: AsyncSession,
        validator: CredentialValidator,
        hasher: CredentialHasher,
    ):
        self.db = db
        self.validator = validator
        self.hasher = hasher
        self.users = UserRepository(db)
        self.profiles = ProfileRepository(db)

    # ─── Lookup ──────────────────────────────────────────────────

    async def get_user(self, user_id: UserId) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    async def get_user_by_email(self, email: str) -> User:
        normalized = normalize_email(email)
        user = await self.users.get_by_email(normalized)
        if user is None:
            raise UserNotFoundError(normalized)
        return user

    # ─── Checks (collect, never raise) ───────────────────────────

    async def _check_new_email(
        self,
        email: str,
        rejections: RejectionSet,
        exclude_id: UserId | None = None,
    ) -> None:
        violations = check_email_format(email)
        if violations:
            rejections.add_many("email", "INVALID_EMAIL", violations)
            return
        if await self.users.email_taken(email, exclude_id):
            _add_duplicate_email(rejections, email)

    def _check_password(
        self, password: str, identity: str, rejections: RejectionSet,
    ) -> bool:
        violations = self.validator.validate(password, identity)
        rejections.add_many("password", "WEAK_CREDENTIAL", violations)
        return not violations

    # ─── Account ─────────────────────────────────────────────────

    async def create_user(self, name: str, email: str, password: str) -> User:
        """Register a new account. Nothing is written unless every check passes."""
        email = normalize_email(email)
        rejections = RejectionSet()
        await self._check_new_email(email, rejections)
        self._check_password(password, email, rejections)
        if rejections:
            logger.warning(f"Registration rejected: {rejections.codes}")
            rejections.raise_if_any()

        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        user = User(
            name=name, email=email, username=email,
            password_hash=password_hash, profile=None,
        )
        try:
            async with transaction(self.db):
                await self.users.insert(user)
        except ConstraintViolationError as e:
            raise _duplicate_email_race(email, ErrorContext()) from e
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def update_user(
        self,
        user_id: UserId,
        name: str,
        email: str | None = None,
        password: str | None = None,
    ) -> User:
        """Apply name plus the optional email/password changes, all or nothing."""
        user = await self.get_user(user_id)
        rejections = RejectionSet()
        changes: dict[str, object] = {"name": name}

        new_email = normalize_email(email)
        if not is_blank(new_email) and new_email != user.email:
            await self._check_new_email(new_email, rejections, exclude_id=user.id)
            changes["email"] = new_email
            changes["username"] = new_email

        new_hash: str | None = None
        if not is_blank(password):
            identity = changes.get("email", user.email)
            if self._check_password(password, identity, rejections):
                new_hash = await asyncio.to_thread(self.hasher.hash, password)

        if rejections:
            # new_hash (if any) is dropped here and never reaches the row
            logger.warning(
                f"Update rejected: {rejections.codes}",
                extra={"user_id": user.id},
            )
            rejections.raise_if_any(ErrorContext(user_id=str(user.id)))

        if new_hash is not None:
            changes["password_hash"] = new_hash
        context = ErrorContext(user_id=str(user.id))
        try:
            async with transaction(self.db):
                await self.users.update_fields(user, **changes)
        except ConstraintViolationError as e:
            if "email" not in changes:
                raise
            raise _duplicate_email_race(changes["email"], context) from e
        logger.info(
            f"User updated: {sorted(changes)}", extra={"user_id": user.id},
        )
        return user

    async def verify_credentials(self, email: str, password: str) -> User:
        """Return the user whose stored hash matches password."""
        user = await self.users.get_by_email(normalize_email(email))
        if user is None or not await asyncio.to_thread(
            self.hasher.verify, password, user.password_hash,
        ):
            raise InvalidCredentialsError()
        return user

    async def delete_user(self, user_id: UserId) -> None:
        """Cascade: profile first, then the user, committed together."""
        user = await self.get_user(user_id)
        async with transaction(self.db):
            if user.profile is not None:
                await self.profiles.delete(user.profile)
                await self.users.reload_profile(user)
            await self.users.delete(user)
        logger.info("User deleted", extra={"user_id": user_id})

    # ─── Profile ─────────────────────────────────────────────────

    async def upsert_profile(self, user_id: UserId, fields: dict) -> User:
        """Create the profile on first edit, afterwards mutate it in place."""
        user = await self.get_user(user_id)
        async with transaction(self.db):
            if user.profile is None:
                profile = Profile(**fields)
                user.profile = profile
                await self.profiles.insert(profile)
            else:
                await self.profiles.update_fields(user.profile, **fields)
        await self.profiles.load_currency(user.profile)
        logger.info(
            f"Profile {user.profile.id} saved", extra={"user_id": user.id},
        )
        return user

    async def delete_profile(self, user_id: UserId) -> User:
        """Remove the profile if there is one; a user without profile is a no-op."""
        user = await self.get_user(user_id)
        if user.profile is None:
            return user
        async with transaction(self.db):
            await self.profiles.delete(user.profile)
        await self.users.reload_profile(user)
        logger.info("Profile deleted", extra={"user_id": user.id})
        return user


def _add_duplicate_email(rejections: RejectionSet, email: str) -> None:
    rejections.add(
        "email", "DUPLICATE_EMAIL",
        f"Email '{email}' is already registered",
        ErrorCategory.CONFLICT,
    )


def _duplicate_email_race(email: str, context: ErrorContext) -> RejectedError:
    """The uniqueness check passed but the unique index fired on commit."""
    rejections = RejectionSet()
    _add_duplicate_email(rejections, email)
    logger.warning(
        f"Email uniqueness race on {email}: {rejections.codes}",
        extra={"user_id": context.user_id},
    )
    return RejectedError(rejections, context)
