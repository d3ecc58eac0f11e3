"""Expense Filters — named, ANDed criteria applied during bulk retrieval.

Invariants:
    - Only FilterKey criteria are recognized; unknown keys are ignored
    - Empty values are ignored; min/max amount ignored when <= 0
    - category/description: case-insensitive substring match
    - date_from/date_to: inclusive bounds on expense.date
    - Result order: date descending, ties by created_at descending then id

Design Decisions:
    - normalize_filters is the single gate for criteria; both storage backends
      consume its output, so the table of semantics lives in one place
    - Naive datetimes are read as UTC, matching how storage persists them
    - Dates whose UTC equivalent overflows the datetime range count as unparseable
"""

import math
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from app.core.expense import Expense


class FilterKey(str, Enum):
    CATEGORY = "category"
    DESCRIPTION = "description"
    DATE_FROM = "date_from"
    DATE_TO = "date_to"
    MIN_AMOUNT = "min_amount"
    MAX_AMOUNT = "max_amount"


TEXT_KEYS = (FilterKey.CATEGORY, FilterKey.DESCRIPTION)
DATE_KEYS = (FilterKey.DATE_FROM, FilterKey.DATE_TO)
AMOUNT_KEYS = (FilterKey.MIN_AMOUNT, FilterKey.MAX_AMOUNT)

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime(value: Any) -> datetime | None:
    """datetime or ISO-8601 string -> aware UTC datetime; anything else -> None."""
    if isinstance(value, datetime):
        try:
            return as_utc(value)
        except OverflowError:
            return None
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(text))
    except (ValueError, OverflowError):
        return None


def _parse_amount(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return float(value)


def normalize_filters(filters: Mapping[str, Any] | None) -> dict[FilterKey, Any]:
    """Keep recognized, non-empty, well-typed criteria. Pure."""
    criteria: dict[FilterKey, Any] = {}
    for raw_key, value in (filters or {}).items():
        try:
            key = FilterKey(raw_key)
        except ValueError:
            continue
        if key in TEXT_KEYS:
            if isinstance(value, str) and value:
                criteria[key] = value
        elif key in DATE_KEYS:
            parsed = parse_datetime(value)
            if parsed is not None:
                criteria[key] = parsed
        else:
            amount = _parse_amount(value)
            if amount is not None:
                criteria[key] = amount
    return criteria


def matches_filters(expense: Expense, criteria: Mapping[FilterKey, Any]) -> bool:
    """Evaluate normalized criteria against one expense."""
    for key, value in criteria.items():
        if key is FilterKey.CATEGORY:
            if value.casefold() not in expense.category.casefold():
                return False
        elif key is FilterKey.DESCRIPTION:
            if value.casefold() not in expense.description.casefold():
                return False
        elif key is FilterKey.DATE_FROM:
            if as_utc(expense.date) < value:
                return False
        elif key is FilterKey.DATE_TO:
            if as_utc(expense.date) > value:
                return False
        elif key is FilterKey.MIN_AMOUNT:
            if expense.amount < value:
                return False
        elif key is FilterKey.MAX_AMOUNT:
            if expense.amount > value:
                return False
    return True


def sort_most_recent_first(expenses: Iterable[Expense]) -> list[Expense]:
    return sorted(
        expenses,
        key=lambda e: (
            as_utc(e.date),
            as_utc(e.created_at) if e.created_at else _EARLIEST,
            str(e.id),
        ),
        reverse=True,
    )
