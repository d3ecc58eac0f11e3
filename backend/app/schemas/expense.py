"""Expense Schemas — Pydantic request/response models for the /expenses API.

Invariants:
    - ExpenseCreate: all four business fields required, amount finite and > 0
    - ExpenseUpdate: every field optional; absent/empty/zero means "leave unchanged"
    - Emptiness of description/category is a business rule, checked by the entity
    - Responses are built from core Expense entities (from_attributes)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ExpenseCreate(BaseModel):
    """Body of POST /expenses."""
    description: str
    amount: float = Field(gt=0, allow_inf_nan=False)
    category: str
    date: datetime


class ExpenseUpdate(BaseModel):
    """Body of PUT /expenses/{id} — any subset of fields."""
    description: str | None = None
    amount: float | None = Field(default=None, allow_inf_nan=False)
    category: str | None = None
    date: datetime | None = None


class ExpenseResponse(BaseModel):
    """Public expense shape."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    description: str
    amount: float
    category: str
    date: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ExpenseDataResponse(BaseModel):
    data: ExpenseResponse


class ExpenseMessageResponse(BaseModel):
    message: str
    data: ExpenseResponse


class ExpenseListResponse(BaseModel):
    data: list[ExpenseResponse]
    count: int


class MessageResponse(BaseModel):
    message: str
