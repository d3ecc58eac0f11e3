"""Boundary Protocols — the Storage Port between core/services and persistence.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Every operation takes an OperationContext; implementations honor its deadline
    - get_by_id/delete/exists raise InvalidIdentifierError for malformed ids,
      distinct from ExpenseNotFoundError
    - get_all returns expenses ordered by date descending (ties broken consistently)
    - update is a full replace and does NOT check existence (the service does)
    - delete is authoritative: zero rows affected raises ExpenseNotFoundError
    - Failures of the backing store surface as StorageError

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; the entity and filter logic stay sync
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from app.core.expense import Expense
from app.core.operation_context import OperationContext


class ExpenseRepository(Protocol):
    """Contract for expense persistence — implemented by shell."""
    async def create(self, ctx: OperationContext, expense: Expense) -> None: ...
    async def get_by_id(self, ctx: OperationContext, expense_id: str) -> Expense: ...
    async def get_all(
        self, ctx: OperationContext, filters: Mapping[str, Any],
    ) -> Sequence[Expense]: ...
    async def update(self, ctx: OperationContext, expense: Expense) -> None: ...
    async def delete(self, ctx: OperationContext, expense_id: str) -> None: ...
    async def exists(self, ctx: OperationContext, expense_id: str) -> bool: ...
