"""Expense Routes — CRUD endpoints over the expense collection.

Invariants:
    - Body shape is validated by Pydantic before the service is called
    - A blank path id is a request-validation error (400), raised before the service runs
    - Unparseable numeric/date query filters are dropped, never rejected
    - Service errors propagate to api/error_handlers.py, which owns the status mapping

Design Decisions:
    - Thin routes: all decisions about existence and validity live in ExpenseService
"""

import math
from typing import Any

from fastapi import APIRouter, Depends, Query, status
from fastapi.exceptions import RequestValidationError

from app.api.dependencies import get_expense_service, get_operation_context
from app.core.expense_filters import FilterKey, parse_datetime
from app.core.operation_context import OperationContext
from app.schemas.expense import (
    ExpenseCreate, ExpenseUpdate, ExpenseResponse,
    ExpenseDataResponse, ExpenseMessageResponse, ExpenseListResponse,
    MessageResponse,
)
from app.services.expense_service import ExpenseService

router = APIRouter(prefix="/expenses", tags=["expenses"])


def _require_id(expense_id: str) -> str:
    if not expense_id.strip():
        raise RequestValidationError([{
            "loc": ("path", "expense_id"),
            "msg": "Expense ID is required",
            "type": "missing",
        }])
    return expense_id


def _parse_amount(raw: str | None) -> float | None:
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def collect_filters(
    category: str | None,
    description: str | None,
    date_from: str | None,
    date_to: str | None,
    min_amount: str | None,
    max_amount: str | None,
) -> dict[str, Any]:
    """Build the filter mapping from raw query strings, dropping unparseable values."""
    filters: dict[str, Any] = {}
    if category:
        filters[FilterKey.CATEGORY.value] = category
    if description:
        filters[FilterKey.DESCRIPTION.value] = description
    for key, raw in ((FilterKey.DATE_FROM, date_from), (FilterKey.DATE_TO, date_to)):
        parsed = parse_datetime(raw)
        if parsed is not None:
            filters[key.value] = parsed
    for key, raw in ((FilterKey.MIN_AMOUNT, min_amount), (FilterKey.MAX_AMOUNT, max_amount)):
        amount = _parse_amount(raw)
        if amount is not None:
            filters[key.value] = amount
    return filters


@router.post(
    "", response_model=ExpenseMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_expense(
    body: ExpenseCreate,
    ctx: OperationContext = Depends(get_operation_context),
    service: ExpenseService = Depends(get_expense_service),
):
    """Create a new expense."""
    expense = await service.create_expense(ctx, body)
    return ExpenseMessageResponse(
        message="Expense created successfully",
        data=ExpenseResponse.model_validate(expense),
    )


@router.get("", response_model=ExpenseListResponse)
async def list_expenses(
    category: str | None = Query(None),
    description: str | None = Query(None),
    date_from: str | None = Query(None),
    date_to: str | None = Query(None),
    min_amount: str | None = Query(None),
    max_amount: str | None = Query(None),
    ctx: OperationContext = Depends(get_operation_context),
    service: ExpenseService = Depends(get_expense_service),
):
    """List expenses, most recent first, with optional filters."""
    filters = collect_filters(
        category, description, date_from, date_to, min_amount, max_amount,
    )
    expenses = await service.get_all_expenses(ctx, filters)
    return ExpenseListResponse(
        data=[ExpenseResponse.model_validate(e) for e in expenses],
        count=len(expenses),
    )


@router.get("/{expense_id}", response_model=ExpenseDataResponse)
async def get_expense(
    expense_id: str,
    ctx: OperationContext = Depends(get_operation_context),
    service: ExpenseService = Depends(get_expense_service),
):
    """Get one expense."""
    _require_id(expense_id)
    expense = await service.get_expense(ctx, expense_id)
    return ExpenseDataResponse(data=ExpenseResponse.model_validate(expense))


@router.put("/{expense_id}", response_model=ExpenseMessageResponse)
async def update_expense(
    expense_id: str,
    body: ExpenseUpdate,
    ctx: OperationContext = Depends(get_operation_context),
    service: ExpenseService = Depends(get_expense_service),
):
    """Partially update an expense; omitted fields keep their values."""
    _require_id(expense_id)
    expense = await service.update_expense(ctx, expense_id, body)
    return ExpenseMessageResponse(
        message="Expense updated successfully",
        data=ExpenseResponse.model_validate(expense),
    )


@router.delete("/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    expense_id: str,
    ctx: OperationContext = Depends(get_operation_context),
    service: ExpenseService = Depends(get_expense_service),
):
    """Delete an expense."""
    _require_id(expense_id)
    await service.delete_expense(ctx, expense_id)
    return MessageResponse(message="Expense deleted successfully")
