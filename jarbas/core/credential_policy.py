"""Credential Policy — password strength rules, evaluated without IO.

Invariants:
    - check_password() returns every violated rule, never only the first
    - Messages are stable strings; clients display them verbatim
    - Empty list means the password is acceptable

Design Decisions:
    - PasswordPolicy is a frozen dataclass built from Settings (from_settings)
    - PolicyCredentialValidator satisfies the CredentialValidator protocol so
      services never depend on the concrete rules
"""

from dataclasses import dataclass

from jarbas.config import Settings


@dataclass(frozen=True)
class PasswordPolicy:
    """Configurable password strength rules."""
    min_length: int = 6
    require_digit: bool = True
    require_lowercase: bool = True
    require_uppercase: bool = True
    require_non_alphanumeric: bool = True
    min_unique_chars: int = 1

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordPolicy":
        return cls(
            min_length=settings.password_min_length,
            require_digit=settings.password_require_digit,
            require_lowercase=settings.password_require_lowercase,
            require_uppercase=settings.password_require_uppercase,
            require_non_alphanumeric=settings.password_require_non_alphanumeric,
            min_unique_chars=settings.password_min_unique_chars,
        )


def check_password(
    password: str, policy: PasswordPolicy, identity: str | None = None,
) -> list[str]:
    """Return the violated rules for password (empty when acceptable)."""
    violations: list[str] = []
    if len(password) < policy.min_length:
        violations.append(
            f"Passwords must be at least {policy.min_length} characters.",
        )
    if policy.require_non_alphanumeric and password.isalnum():
        violations.append(
            "Passwords must have at least one non alphanumeric character.",
        )
    if policy.require_digit and not any(c.isdigit() for c in password):
        violations.append("Passwords must have at least one digit ('0'-'9').")
    if policy.require_lowercase and not any(c.islower() for c in password):
        violations.append("Passwords must have at least one lowercase ('a'-'z').")
    if policy.require_uppercase and not any(c.isupper() for c in password):
        violations.append("Passwords must have at least one uppercase ('A'-'Z').")
    if len(set(password)) < policy.min_unique_chars:
        violations.append(
            f"Passwords must use at least {policy.min_unique_chars} different characters.",
        )
    if identity and password.casefold() == identity.casefold():
        violations.append("Passwords must not be the same as the email.")
    return violations


class PolicyCredentialValidator:
    """CredentialValidator backed by a PasswordPolicy."""

    def __init__(self, policy: PasswordPolicy):
        self.policy = policy

    def validate(self, password: str, identity: str | None = None) -> list[str]:
        return check_password(password, self.policy, identity)
