"""Error Handlers — the single place where failures become HTTP responses.

Invariants:
    - Every error body has the same shape: {"error": {code, message, category, severity, ...}}
    - ExpenseNotFoundError → 404; entity validation kinds → 400
    - Any other ExpensesError (storage, timeout, malformed id) → 500 "Failed to <action>"
    - RequestValidationError (bad JSON, missing/mistyped fields, blank id) → 400,
      the only response carrying a details list
    - Internal messages and wrap chains are logged, never returned

Design Decisions:
    - Routes let service errors propagate; the action name is derived from
      the request method and whether an expense id is in the path
    - 404/400 bodies are rebuilt from a fresh error so the "failed to ..."
      chain accumulated in the service stays out of the response
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import (
    VALIDATION_KINDS, ErrorCategory, ErrorSeverity,
    ExpensesError, ExpenseNotFoundError, ExpenseValidationError,
)

logger = logging.getLogger(__name__)

_ACTIONS = {
    ("POST", False): "create expense",
    ("GET", False): "get expenses",
    ("GET", True): "get expense",
    ("PUT", True): "update expense",
    ("DELETE", True): "delete expense",
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(ExpensesError, expenses_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def describe_action(request: Request) -> str:
    """'get expense', 'create expense', ... for the route that failed."""
    has_id = "expense_id" in request.path_params
    return _ACTIONS.get((request.method, has_id), "process request")


async def expenses_error_handler(request: Request, exc: ExpensesError) -> JSONResponse:
    expense_id = request.path_params.get("expense_id")
    if isinstance(exc, ExpenseNotFoundError):
        logger.info(
            f"Expense not found: {exc.message}",
            extra={"expense_id": expense_id, "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=ExpenseNotFoundError(expense_id or "").to_response(),
        )
    if exc.kind in VALIDATION_KINDS:
        logger.info(
            f"Rejected expense: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ExpenseValidationError(exc.kind).to_response(),
        )

    action = describe_action(request)
    logger.error(
        f"Failed to {action}: {exc.message}",
        extra={
            "error_code": exc.code, "expense_id": expense_id,
            "path": request.url.path,
        },
    )
    return _internal_error(f"Failed to {action}")


async def request_validation_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in e["loc"]),
                        "message": e["msg"],
                        "type": e["type"],
                    }
                    for e in exc.errors()
                ],
            },
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}", exc_info=True,
    )
    return _internal_error("An unexpected error occurred")


def _internal_error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": message,
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )
