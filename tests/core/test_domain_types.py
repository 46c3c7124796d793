"""Domain Types — identity wrappers and profile bracket enums.

Tests:
    - NewType wrappers are transparent at runtime
    - Enums serialize to the stored string values
"""

from uuid import uuid4

from jarbas.core.domain_types import (
    AgeRange, CurrencyId, GoalId, TimeHorizon, UserId,
)


def test_identity_types_wrap_values():
    uid = uuid4()
    assert UserId(uid) == uid
    assert GoalId(3) == 3
    assert CurrencyId(7) == 7


def test_age_range_values():
    assert [a.value for a in AgeRange] == [
        "under_18", "18_24", "25_34", "35_44", "45_59", "60_plus",
    ]


def test_time_horizon_is_str_enum():
    assert TimeHorizon("long") is TimeHorizon.LONG
    assert TimeHorizon.SHORT == "short"
