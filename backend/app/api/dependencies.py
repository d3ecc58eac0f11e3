"""Request Dependencies — per-request execution context and service wiring.

Invariants:
    - Each request gets its own OperationContext (deadline from settings)
    - The service is rebuilt per request around the process-wide repository
"""

from fastapi import Depends

from app.config import get_settings
from app.core.operation_context import OperationContext
from app.core.repository_protocols import ExpenseRepository
from app.infrastructure.storage import get_expense_repository
from app.services.expense_service import ExpenseService


def get_operation_context() -> OperationContext:
    return OperationContext.with_timeout(get_settings().request_timeout_seconds)


def get_expense_service(
    repository: ExpenseRepository = Depends(get_expense_repository),
) -> ExpenseService:
    return ExpenseService(repository)
