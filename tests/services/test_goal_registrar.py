"""Goal Registrar — referential checks, full replacement and deletion."""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from jarbas.core.errors import (
    ConcurrencyError, CurrencyNotFoundError, GoalNotFoundError,
    IdentifierMismatchError, UserNotFoundError,
)
from jarbas.models.goal import Goal
from jarbas.models.user import User


def _goal_fields(user_id, currency_id, **overrides) -> dict:
    fields = {
        "user_id": user_id,
        "currency_id": currency_id,
        "title": "Emergency fund",
        "description": "Six months of expenses",
        "target_amount": Decimal("15000.00"),
        "target_date": date(2027, 12, 31),
    }
    fields.update(overrides)
    return fields


@pytest.fixture
async def goal(registrar, user, currency):
    return await registrar.create_goal(_goal_fields(user.id, currency.id))


# ─── Create ──────────────────────────────────────────────────────

async def test_create_goal_persists_row(registrar, user, currency, count_rows):
    created = await registrar.create_goal(_goal_fields(user.id, currency.id))

    assert created.id is not None
    assert created.user_id == user.id
    assert created.target_amount == Decimal("15000.00")
    assert await count_rows(Goal) == 1


async def test_create_goal_checks_user_before_currency(registrar, count_rows):
    with pytest.raises(UserNotFoundError) as exc_info:
        await registrar.create_goal(_goal_fields(uuid4(), 999))
    assert exc_info.value.code == "USER_NOT_FOUND"
    assert await count_rows(Goal) == 0


async def test_create_goal_with_unknown_currency_writes_nothing(
    registrar, user, count_rows,
):
    with pytest.raises(CurrencyNotFoundError) as exc_info:
        await registrar.create_goal(_goal_fields(user.id, 999))
    assert exc_info.value.code == "CURRENCY_NOT_FOUND"
    assert exc_info.value.http_status == 404
    assert await count_rows(Goal) == 0


# ─── Read ────────────────────────────────────────────────────────

async def test_get_goal_returns_stored_goal(registrar, goal):
    found = await registrar.get_goal(goal.id)
    assert found.title == "Emergency fund"


async def test_get_missing_goal_raises_not_found(registrar):
    with pytest.raises(GoalNotFoundError):
        await registrar.get_goal(12345)


async def test_list_goals_returns_only_the_users_goals(
    registrar, manager, user, currency,
):
    other = await manager.create_user("Bea", "bea@x.com", "Other!9x")
    await registrar.create_goal(_goal_fields(user.id, currency.id, title="Car"))
    await registrar.create_goal(_goal_fields(other.id, currency.id, title="Trip"))
    await registrar.create_goal(_goal_fields(user.id, currency.id, title="House"))

    goals = await registrar.list_goals(user.id)

    assert [g.title for g in goals] == ["Car", "House"]


async def test_list_goals_for_unknown_user_raises_not_found(registrar):
    with pytest.raises(UserNotFoundError):
        await registrar.list_goals(uuid4())


# ─── Update ──────────────────────────────────────────────────────

async def test_update_goal_replaces_editable_fields(registrar, goal, read_db):
    await registrar.update_goal(goal.id, goal.id, {
        "title": "Bigger fund",
        "description": None,
        "target_amount": Decimal("30000.00"),
        "target_date": None,
    })

    stored = await read_db.get(Goal, goal.id, populate_existing=True)
    assert stored.title == "Bigger fund"
    assert stored.description is None
    assert stored.target_amount == Decimal("30000.00")
    assert stored.target_date is None
    assert stored.user_id == goal.user_id


async def test_update_goal_with_mismatched_id_changes_nothing(
    registrar, goal, read_db,
):
    with pytest.raises(IdentifierMismatchError) as exc_info:
        await registrar.update_goal(goal.id, goal.id + 1, {"title": "Other"})
    assert exc_info.value.http_status == 409

    stored = await read_db.get(Goal, goal.id, populate_existing=True)
    assert stored.title == "Emergency fund"


async def test_update_missing_goal_raises_not_found(registrar):
    with pytest.raises(GoalNotFoundError):
        await registrar.update_goal(404, 404, {"title": "Ghost"})


async def test_update_goal_that_still_exists_but_was_not_written_is_a_conflict(
    registrar, goal, monkeypatch,
):
    async def no_rows(goal_id, **fields):
        return 0

    monkeypatch.setattr(registrar.goals, "replace", no_rows)

    with pytest.raises(ConcurrencyError) as exc_info:
        await registrar.update_goal(goal.id, goal.id, {"title": "Lost"})
    assert exc_info.value.code == "CONCURRENCY_CONFLICT"
    assert exc_info.value.http_status == 409


# ─── Delete ──────────────────────────────────────────────────────

async def test_delete_goal_keeps_user(registrar, goal, user, count_rows):
    deleted = await registrar.delete_goal(goal.id)

    assert deleted.id == goal.id
    assert await count_rows(Goal) == 0
    assert await count_rows(User) == 1


async def test_delete_missing_goal_raises_not_found(registrar):
    with pytest.raises(GoalNotFoundError):
        await registrar.delete_goal(77)


async def test_deleting_user_removes_their_goals(
    registrar, manager, goal, user, count_rows,
):
    await manager.delete_user(user.id)
    assert await count_rows(Goal) == 0
