"""Email Policy — normalization, blank handling and syntax checks."""

import pytest

from jarbas.core.email_policy import check_email_format, is_blank, normalize_email


def test_normalize_strips_and_lowercases():
    assert normalize_email("  Ana@X.COM ") == "ana@x.com"


def test_normalize_is_idempotent():
    once = normalize_email(" Bea@Example.org")
    assert normalize_email(once) == once


def test_normalize_none_is_empty():
    assert normalize_email(None) == ""


@pytest.mark.parametrize("raw", [None, ""])
def test_none_and_empty_are_blank(raw):
    assert is_blank(raw)


def test_whitespace_is_not_blank_before_normalization():
    assert not is_blank(" ")
    assert is_blank(normalize_email(" "))


def test_valid_email_has_no_violations():
    assert check_email_format("ana@example.com") == []


@pytest.mark.parametrize("email", ["ana", "ana@", "@x.com", "ana@@x.com"])
def test_malformed_email_reports_one_message(email):
    violations = check_email_format(email)
    assert len(violations) == 1
    assert violations[0].startswith(f"Email '{email}' is invalid:")
