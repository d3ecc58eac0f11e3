"""Expense Service — orchestrates entity validation and Storage Port calls.

Invariants:
    - Stateless apart from the injected repository; safe to share across requests
    - update/delete check exists() first and raise ExpenseNotFoundError before
      any fetch, mutation or delete is attempted
    - update sequence: exists -> get_by_id -> apply_update (re-validates) -> update
    - Errors from lower layers are re-raised via wrap(): the message accumulates
      "failed to X: ...", the class and kind survive
    - No retries: a storage failure surfaces immediately

Design Decisions:
    - Repository injected as a Protocol: SQL store, in-memory store, or test double
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from app.core.errors import ExpensesError, ExpenseNotFoundError
from app.core.expense import Expense
from app.core.operation_context import OperationContext
from app.core.repository_protocols import ExpenseRepository
from app.schemas.expense import ExpenseCreate, ExpenseUpdate

logger = logging.getLogger(__name__)


class ExpenseService:
    """Application service for the expense use cases."""

    def __init__(self, repository: ExpenseRepository):
        self._repository = repository

    async def create_expense(
        self, ctx: OperationContext, request: ExpenseCreate,
    ) -> Expense:
        try:
            expense = Expense.create(
                request.description, request.amount,
                request.category, request.date,
            )
        except ExpensesError as e:
            raise e.wrap("failed to create expense") from e

        try:
            await self._repository.create(ctx, expense)
        except ExpensesError as e:
            raise e.wrap("failed to save expense") from e

        logger.info("Expense created", extra={"expense_id": str(expense.id)})
        return expense

    async def get_expense(self, ctx: OperationContext, expense_id: str) -> Expense:
        try:
            return await self._repository.get_by_id(ctx, expense_id)
        except ExpensesError as e:
            raise e.wrap("failed to get expense") from e

    async def get_all_expenses(
        self, ctx: OperationContext, filters: Mapping[str, Any] | None = None,
    ) -> Sequence[Expense]:
        try:
            return await self._repository.get_all(ctx, filters or {})
        except ExpensesError as e:
            raise e.wrap("failed to get expenses") from e

    async def update_expense(
        self, ctx: OperationContext, expense_id: str, request: ExpenseUpdate,
    ) -> Expense:
        await self._require_existing(ctx, expense_id)

        try:
            expense = await self._repository.get_by_id(ctx, expense_id)
        except ExpensesError as e:
            raise e.wrap("failed to get expense") from e

        try:
            expense.apply_update(
                description=request.description,
                amount=request.amount,
                category=request.category,
                date=request.date,
            )
        except ExpensesError as e:
            raise e.wrap("failed to update expense") from e

        try:
            await self._repository.update(ctx, expense)
        except ExpensesError as e:
            raise e.wrap("failed to save updated expense") from e

        logger.info("Expense updated", extra={"expense_id": str(expense.id)})
        return expense

    async def delete_expense(self, ctx: OperationContext, expense_id: str) -> None:
        await self._require_existing(ctx, expense_id)

        try:
            await self._repository.delete(ctx, expense_id)
        except ExpensesError as e:
            raise e.wrap("failed to delete expense") from e

        logger.info("Expense deleted", extra={"expense_id": expense_id})

    async def _require_existing(self, ctx: OperationContext, expense_id: str) -> None:
        try:
            found = await self._repository.exists(ctx, expense_id)
        except ExpensesError as e:
            raise e.wrap("failed to check expense existence") from e
        if not found:
            raise ExpenseNotFoundError(expense_id)
