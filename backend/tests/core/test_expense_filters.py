"""Expense Filters — criteria normalization, matching and ordering.

Tests cover:
    - Unknown, empty and mistyped criteria are dropped
    - Amount bounds <= 0 are ignored
    - Text criteria are case-insensitive substrings; date bounds are inclusive
    - Ordering is date descending
"""

from datetime import datetime, timedelta, timezone

from app.core.expense_filters import (
    FilterKey, matches_filters, normalize_filters, parse_datetime,
    sort_most_recent_first,
)
from tests.factories import make_expense, utc


def test_normalize_drops_unknown_and_empty_keys():
    criteria = normalize_filters({
        "category": "Food", "description": "", "color": "red", "min_amount": None,
    })
    assert criteria == {FilterKey.CATEGORY: "Food"}


def test_normalize_handles_none():
    assert normalize_filters(None) == {}


def test_normalize_ignores_non_positive_amounts():
    criteria = normalize_filters({"min_amount": 0, "max_amount": -5})
    assert criteria == {}


def test_normalize_rejects_bool_and_string_amounts():
    criteria = normalize_filters({"min_amount": True, "max_amount": "12"})
    assert criteria == {}


def test_normalize_parses_iso_dates():
    criteria = normalize_filters({
        "date_from": "2024-01-01T00:00:00Z", "date_to": "not-a-date",
    })
    assert criteria == {FilterKey.DATE_FROM: utc(2024, 1, 1)}


def test_parse_datetime_treats_naive_as_utc():
    assert parse_datetime(datetime(2024, 1, 1, 12)) == utc(2024, 1, 1, 12)
    assert parse_datetime("2024-01-01T14:00:00+02:00") == utc(2024, 1, 1, 12)
    assert parse_datetime(42) is None


def test_dates_overflowing_utc_are_unparseable():
    assert parse_datetime("0001-01-01T00:00:00+05:00") is None
    assert parse_datetime("9999-12-31T23:00:00-05:00") is None
    edge = datetime(1, 1, 1, 0, 30, tzinfo=timezone(timedelta(hours=1)))
    assert parse_datetime(edge) is None
    assert normalize_filters({"date_to": edge}) == {}


def test_normalize_drops_non_finite_amounts():
    criteria = normalize_filters({
        "min_amount": float("inf"), "max_amount": float("nan"),
    })
    assert criteria == {}


def test_text_match_is_case_insensitive_substring():
    expense = make_expense(description="Morning Coffee", category="Food & Drink")
    assert matches_filters(expense, normalize_filters({"category": "food"}))
    assert matches_filters(expense, normalize_filters({"description": "COFFEE"}))
    assert not matches_filters(expense, normalize_filters({"category": "Transport"}))


def test_date_bounds_are_inclusive():
    expense = make_expense(date=utc(2024, 1, 15, 8, 0))
    exact = {"date_from": utc(2024, 1, 15, 8, 0), "date_to": utc(2024, 1, 15, 8, 0)}
    assert matches_filters(expense, normalize_filters(exact))
    later = {"date_from": utc(2024, 1, 15, 8, 1)}
    assert not matches_filters(expense, normalize_filters(later))


def test_amount_bounds_are_inclusive():
    expense = make_expense(amount=10)
    assert matches_filters(expense, normalize_filters({"min_amount": 10, "max_amount": 10}))
    assert not matches_filters(expense, normalize_filters({"min_amount": 10.01}))


def test_criteria_are_anded():
    a = make_expense(category="Food", amount=5)
    b = make_expense(category="Food", amount=50)
    c = make_expense(category="Transport", amount=20)
    criteria = normalize_filters({"category": "Food", "min_amount": 10})
    assert [e for e in (a, b, c) if matches_filters(e, criteria)] == [b]


def test_sort_most_recent_first():
    base = utc(2024, 3, 1)
    middle = make_expense(date=base)
    oldest = make_expense(date=base - timedelta(days=10))
    newest = make_expense(date=base + timedelta(days=10))
    ordered = sort_most_recent_first([middle, oldest, newest])
    assert ordered == [newest, middle, oldest]


def test_sort_mixes_naive_and_aware_dates():
    naive = make_expense(date=datetime(2024, 1, 2))
    aware = make_expense(date=datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert sort_most_recent_first([aware, naive]) == [naive, aware]
