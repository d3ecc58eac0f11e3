"""In-Memory Expense Repository — process-local implementation of the Storage Port.

Invariants:
    - Same contract as SqlAlchemyExpenseRepository (ids, ordering, NotFound semantics)
    - Stored and returned entities are copies; callers never alias internal state
    - No await between read and write: each operation is atomic on the event loop

Design Decisions:
    - Used for STORAGE_BACKEND=memory local runs and as the service-layer test double
    - Deadline honored by refusing to start once the context has expired
"""

import copy
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.core.errors import ExpenseNotFoundError, StorageTimeoutError
from app.core.expense import Expense
from app.core.expense_filters import (
    matches_filters, normalize_filters, sort_most_recent_first,
)
from app.core.operation_context import OperationContext
from app.infrastructure.expense_repository import parse_expense_id


def _check_deadline(ctx: OperationContext, operation: str) -> None:
    if ctx.expired:
        raise StorageTimeoutError(operation)


class MemoryExpenseRepository:
    """ExpenseRepository backed by a dict keyed by UUID."""

    def __init__(self) -> None:
        self._rows: dict[UUID, Expense] = {}

    async def create(self, ctx: OperationContext, expense: Expense) -> None:
        _check_deadline(ctx, "insert")
        now = datetime.now(timezone.utc)
        expense.created_at = now
        expense.updated_at = now
        self._rows[expense.id] = copy.deepcopy(expense)

    async def get_by_id(self, ctx: OperationContext, expense_id: str) -> Expense:
        pk = parse_expense_id(expense_id)
        _check_deadline(ctx, "select")
        row = self._rows.get(pk)
        if row is None:
            raise ExpenseNotFoundError(str(pk))
        return copy.deepcopy(row)

    async def get_all(
        self, ctx: OperationContext, filters: Mapping[str, Any],
    ) -> list[Expense]:
        _check_deadline(ctx, "select")
        criteria = normalize_filters(filters)
        found = [e for e in self._rows.values() if matches_filters(e, criteria)]
        return [copy.deepcopy(e) for e in sort_most_recent_first(found)]

    async def update(self, ctx: OperationContext, expense: Expense) -> None:
        _check_deadline(ctx, "update")
        stored = self._rows.get(expense.id)
        if stored is None:
            return
        expense.created_at = stored.created_at
        expense.updated_at = datetime.now(timezone.utc)
        self._rows[expense.id] = copy.deepcopy(expense)

    async def delete(self, ctx: OperationContext, expense_id: str) -> None:
        pk = parse_expense_id(expense_id)
        _check_deadline(ctx, "delete")
        if self._rows.pop(pk, None) is None:
            raise ExpenseNotFoundError(str(pk))

    async def exists(self, ctx: OperationContext, expense_id: str) -> bool:
        pk = parse_expense_id(expense_id)
        _check_deadline(ctx, "count")
        return pk in self._rows
