"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps UUID; GoalId and CurrencyId wrap int
    - Profile brackets are encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders and store as plain strings
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
GoalId = NewType("GoalId", int)
CurrencyId = NewType("CurrencyId", int)


# ─── Enums ───────────────────────────────────────────────────────

class AgeRange(str, Enum):
    """Age bracket declared on the financial profile."""
    UNDER_18 = "under_18"
    FROM_18_TO_24 = "18_24"
    FROM_25_TO_34 = "25_34"
    FROM_35_TO_44 = "35_44"
    FROM_45_TO_59 = "45_59"
    OVER_60 = "60_plus"


class TimeHorizon(str, Enum):
    """How far ahead the user plans — drives risk tolerance."""
    SHORT = "short"        # up to 2 years
    MEDIUM = "medium"      # 2–5 years
    LONG = "long"          # 5+ years
