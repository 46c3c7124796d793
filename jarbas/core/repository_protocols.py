"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Credential validation and hashing are accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Both protocols are sync: bcrypt and the policy checks are CPU-bound, no IO
"""

from typing import Protocol


class CredentialValidator(Protocol):
    """Contract for password strength checks."""
    def validate(self, password: str, identity: str | None = None) -> list[str]: ...


class CredentialHasher(Protocol):
    """Contract for one-way password hashing."""
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, password_hash: str) -> bool: ...
