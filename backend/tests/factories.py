"""Test factories — small builders shared across test packages."""

from datetime import datetime, timezone

from app.core.expense import Expense


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def make_expense(
    description: str = "Coffee",
    amount: float = 4.5,
    category: str = "Food",
    date: datetime | None = None,
) -> Expense:
    return Expense.create(
        description, amount, category, date or utc(2024, 1, 15, 8, 0),
    )
