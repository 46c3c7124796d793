"""Email Policy — normalization and syntax rules shared by registration and update.

Invariants:
    - normalize_email() is idempotent: strip + lower-case
    - check_email_format() never touches DNS (no deliverability lookup)
    - Uniqueness is NOT checked here; it needs the database (services layer)
"""

from email_validator import EmailNotValidError, validate_email


def normalize_email(raw: str | None) -> str:
    """Return the canonical form used for storage and lookup ("" for None)."""
    return (raw or "").strip().lower()


def is_blank(raw: str | None) -> bool:
    """Empty string and None are the same thing: "not provided"."""
    return not raw


def check_email_format(email: str) -> list[str]:
    """Return syntax violations for email (empty when acceptable)."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        return [f"Email '{email}' is invalid: {e}"]
    return []
