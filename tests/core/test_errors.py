"""Error Hierarchy — RejectionSet aggregation, status precedence, response envelope.

Tests:
    - Field errors keep insertion order and group by field
    - Status precedence: not found > authentication > validation > conflict
    - to_response() always carries "errors"; RejectedError adds "details"
    - Single-cause subclasses map to the expected code and status
"""

import pytest

from jarbas.core.errors import (
    ConcurrencyError, ConstraintViolationError, DatabaseError, ErrorCategory,
    ErrorContext, ErrorSeverity,
    GoalNotFoundError, IdentifierMismatchError, InvalidCredentialsError,
    RejectedError, RejectionSet, UserNotFoundError,
)


def _conflict_and_validation() -> RejectionSet:
    rejections = RejectionSet()
    rejections.add(
        "email", "DUPLICATE_EMAIL", "Email 'a@x.com' is already registered",
        ErrorCategory.CONFLICT,
    )
    rejections.add_many("password", "WEAK_CREDENTIAL", ["too short", "no digit"])
    return rejections


def test_empty_rejection_set_is_falsy_and_does_not_raise():
    rejections = RejectionSet()
    assert not rejections
    rejections.raise_if_any()


def test_by_field_groups_messages_in_order():
    rejections = _conflict_and_validation()
    assert len(rejections) == 3
    assert rejections.by_field() == {
        "email": ["Email 'a@x.com' is already registered"],
        "password": ["too short", "no digit"],
    }
    assert rejections.codes == ["DUPLICATE_EMAIL", "WEAK_CREDENTIAL"]


def test_validation_outranks_conflict():
    assert _conflict_and_validation().http_status() == 400


def test_conflict_alone_is_409():
    rejections = RejectionSet()
    rejections.add("email", "DUPLICATE_EMAIL", "taken", ErrorCategory.CONFLICT)
    assert rejections.http_status() == 409
    assert rejections.primary_category() == ErrorCategory.CONFLICT


def test_not_found_outranks_everything():
    rejections = _conflict_and_validation()
    rejections.add("user", "USER_NOT_FOUND", "gone", ErrorCategory.RESOURCE_NOT_FOUND)
    rejections.add("password", "INVALID_CREDENTIALS", "no", ErrorCategory.AUTHENTICATION)
    assert rejections.http_status() == 404


def test_raise_if_any_wraps_in_rejected_error():
    with pytest.raises(RejectedError) as exc_info:
        _conflict_and_validation().raise_if_any(ErrorContext(user_id="u1"))
    err = exc_info.value
    assert err.code == "REQUEST_REJECTED"
    assert err.message == "Request rejected with 3 field error(s)"
    assert err.context.user_id == "u1"


def test_rejected_error_with_one_code_keeps_it():
    rejections = RejectionSet()
    rejections.add_many("password", "WEAK_CREDENTIAL", ["too short", "no digit"])
    err = RejectedError(rejections)
    assert err.code == "WEAK_CREDENTIAL"


def test_rejected_error_response_envelope():
    body = RejectedError(_conflict_and_validation()).to_response()["error"]
    assert body["category"] == "validation"
    assert body["severity"] == "error"
    assert body["errors"]["password"] == ["too short", "no digit"]
    assert body["details"][0] == {
        "field": "email",
        "code": "DUPLICATE_EMAIL",
        "message": "Email 'a@x.com' is already registered",
    }
    assert "timestamp" in body


def test_single_cause_errors():
    assert UserNotFoundError("x").http_status == 404
    assert GoalNotFoundError(3).message == "Goal '3' not found"
    assert IdentifierMismatchError(1, 2).http_status == 409
    assert InvalidCredentialsError().http_status == 401
    assert InvalidCredentialsError().field_errors() == {
        "password": ["Invalid email or password"],
    }


def test_infrastructure_errors_have_no_field_errors():
    db = DatabaseError("Connection or operational error", "operational")
    assert db.http_status == 503
    assert db.to_response()["error"]["errors"] == {}
    assert db.to_response()["error"]["severity"] == "critical"
    assert ConcurrencyError("busy").http_status == 409


def test_constraint_violation_is_a_conflict():
    body = ConstraintViolationError().to_response()["error"]
    assert ConstraintViolationError().http_status == 409
    assert body["code"] == "CONSTRAINT_VIOLATION"
    assert body["category"] == "conflict"


def test_severity_levels_are_the_ones_errors_use():
    assert {s.value for s in ErrorSeverity} == {"error", "critical"}
