"""Expense Entity — record shape and the invariants every stored expense satisfies.

Invariants:
    - description and category are non-empty strings
    - amount is finite and > 0
    - date is an explicit instant: never None, never the zero datetime (0001-01-01T00:00),
      and always convertible to UTC without leaving the datetime range
    - Rules are checked in fixed order: description, amount, category, date;
      the first violation wins
    - Expense.create is all-or-nothing: no partially valid entity is ever returned
    - apply_update mutates in place, then re-validates the whole entity

Design Decisions:
    - Pure dataclass, no ORM coupling: storage maps rows to/from this type
    - created_at/updated_at are owned by storage; the entity only carries them
    - Partial update treats ""/None/amount <= 0/zero date as "not provided".
      A caller cannot blank a text field or set a non-positive amount this way.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone

from app.core.domain_types import ExpenseId, new_expense_id
from app.core.errors import ErrorKind, ExpenseValidationError


ZERO_DATE = datetime.min


def is_zero_date(value: datetime | None) -> bool:
    """True for an unset date (None or 0001-01-01T00:00:00, any tz)."""
    if value is None:
        return True
    return value.replace(tzinfo=None) == ZERO_DATE


def _fits_utc(value: datetime) -> bool:
    """False when the UTC equivalent falls outside datetime.min..datetime.max."""
    if value.tzinfo is None:
        return True
    try:
        value.astimezone(timezone.utc)
    except OverflowError:
        return False
    return True


def _is_valid_amount(amount: float | None) -> bool:
    if amount is None or isinstance(amount, bool):
        return False
    return math.isfinite(amount) and amount > 0


def first_violation(
    description: str | None,
    amount: float | None,
    category: str | None,
    date: datetime | None,
) -> ErrorKind | None:
    """Return the kind of the first broken rule, or None when all hold."""
    if not description:
        return ErrorKind.INVALID_DESCRIPTION
    if not _is_valid_amount(amount):
        return ErrorKind.INVALID_AMOUNT
    if not category:
        return ErrorKind.INVALID_CATEGORY
    if is_zero_date(date) or not _fits_utc(date):
        return ErrorKind.INVALID_DATE
    return None


@dataclass
class Expense:
    """The sole business record."""
    description: str
    amount: float
    category: str
    date: datetime
    id: ExpenseId = field(default_factory=new_expense_id)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls, description: str, amount: float, category: str, date: datetime,
    ) -> "Expense":
        """Build a new expense with a fresh id. Raises ExpenseValidationError."""
        kind = first_violation(description, amount, category, date)
        if kind is not None:
            raise ExpenseValidationError(kind)
        return cls(
            description=description, amount=amount,
            category=category, date=date,
        )

    def validate(self) -> None:
        kind = first_violation(
            self.description, self.amount, self.category, self.date,
        )
        if kind is not None:
            raise ExpenseValidationError(kind)

    def apply_update(
        self,
        description: str | None = None,
        amount: float | None = None,
        category: str | None = None,
        date: datetime | None = None,
    ) -> None:
        """Replace each supplied field, then re-validate the whole entity."""
        if description:
            self.description = description
        if _is_valid_amount(amount):
            self.amount = amount
        if category:
            self.category = category
        if not is_zero_date(date):
            self.date = date
        self.validate()
