"""SQLAlchemy Expense Repository — PostgreSQL implementation of the Storage Port.

Invariants:
    - One session per operation; no session outlives the call that opened it
    - Every operation is bounded by the OperationContext deadline (run_bounded)
    - Malformed ids raise InvalidIdentifierError before any query runs
    - create/update stamp created_at/updated_at and copy them back onto the entity
    - update never checks existence: a missing row makes it a no-op
    - delete raises ExpenseNotFoundError when zero rows were affected

Design Decisions:
    - Filters come from normalize_filters, so the SQL clauses mirror matches_filters
    - icontains(autoescape=True): substring semantics even when the value holds % or _
"""

import logging
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, select, update

from app.core.errors import InvalidIdentifierError, ExpenseNotFoundError
from app.core.expense import Expense
from app.core.expense_filters import FilterKey, normalize_filters
from app.core.operation_context import OperationContext
from app.infrastructure.database import DatabaseSessionManager, run_bounded
from app.models.expense import Expense as ExpenseModel

logger = logging.getLogger(__name__)


def parse_expense_id(expense_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(expense_id))
    except ValueError as e:
        raise InvalidIdentifierError(str(expense_id)) from e


def _to_entity(row: ExpenseModel) -> Expense:
    return Expense(
        id=row.id,
        description=row.description,
        amount=row.amount,
        category=row.category,
        date=row.date,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _filter_clauses(criteria: Mapping[FilterKey, Any]) -> list:
    clauses = []
    for key, value in criteria.items():
        if key is FilterKey.CATEGORY:
            clauses.append(ExpenseModel.category.icontains(value, autoescape=True))
        elif key is FilterKey.DESCRIPTION:
            clauses.append(ExpenseModel.description.icontains(value, autoescape=True))
        elif key is FilterKey.DATE_FROM:
            clauses.append(ExpenseModel.date >= value)
        elif key is FilterKey.DATE_TO:
            clauses.append(ExpenseModel.date <= value)
        elif key is FilterKey.MIN_AMOUNT:
            clauses.append(ExpenseModel.amount >= value)
        elif key is FilterKey.MAX_AMOUNT:
            clauses.append(ExpenseModel.amount <= value)
    return clauses


class SqlAlchemyExpenseRepository:
    """ExpenseRepository backed by an async SQLAlchemy engine."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def create(self, ctx: OperationContext, expense: Expense) -> None:
        async def _create() -> None:
            now = datetime.now(timezone.utc)
            async with self._db.session() as session:
                session.add(ExpenseModel(
                    id=expense.id,
                    description=expense.description,
                    amount=expense.amount,
                    category=expense.category,
                    date=expense.date,
                    created_at=now,
                    updated_at=now,
                ))
                await session.commit()
            expense.created_at = now
            expense.updated_at = now

        await run_bounded(ctx, "insert", _create)

    async def get_by_id(self, ctx: OperationContext, expense_id: str) -> Expense:
        pk = parse_expense_id(expense_id)

        async def _get() -> Expense:
            async with self._db.session() as session:
                result = await session.execute(
                    select(ExpenseModel).where(ExpenseModel.id == pk),
                )
                row = result.scalar_one_or_none()
                if row is None:
                    raise ExpenseNotFoundError(str(pk))
                return _to_entity(row)

        return await run_bounded(ctx, "select", _get)

    async def get_all(
        self, ctx: OperationContext, filters: Mapping[str, Any],
    ) -> list[Expense]:
        criteria = normalize_filters(filters)
        stmt = (
            select(ExpenseModel)
            .where(*_filter_clauses(criteria))
            .order_by(
                ExpenseModel.date.desc(),
                ExpenseModel.created_at.desc(),
                ExpenseModel.id.desc(),
            )
        )

        async def _list() -> list[Expense]:
            async with self._db.session() as session:
                result = await session.execute(stmt)
                return [_to_entity(row) for row in result.scalars().all()]

        return await run_bounded(ctx, "select", _list)

    async def update(self, ctx: OperationContext, expense: Expense) -> None:
        async def _update() -> None:
            now = datetime.now(timezone.utc)
            async with self._db.session() as session:
                await session.execute(
                    update(ExpenseModel)
                    .where(ExpenseModel.id == expense.id)
                    .values(
                        description=expense.description,
                        amount=expense.amount,
                        category=expense.category,
                        date=expense.date,
                        updated_at=now,
                    ),
                )
                await session.commit()
            expense.updated_at = now

        await run_bounded(ctx, "update", _update)

    async def delete(self, ctx: OperationContext, expense_id: str) -> None:
        pk = parse_expense_id(expense_id)

        async def _delete() -> None:
            async with self._db.session() as session:
                result = await session.execute(
                    delete(ExpenseModel).where(ExpenseModel.id == pk),
                )
                await session.commit()
                if result.rowcount == 0:
                    raise ExpenseNotFoundError(str(pk))

        await run_bounded(ctx, "delete", _delete)

    async def exists(self, ctx: OperationContext, expense_id: str) -> bool:
        pk = parse_expense_id(expense_id)

        async def _exists() -> bool:
            async with self._db.session() as session:
                result = await session.execute(
                    select(func.count())
                    .select_from(ExpenseModel)
                    .where(ExpenseModel.id == pk),
                )
                return result.scalar_one() > 0

        return await run_bounded(ctx, "count", _exists)
