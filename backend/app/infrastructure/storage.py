"""Storage Wiring — selects and initializes the Storage Port implementation at startup.

Invariants:
    - Exactly one repository per process, created by init_storage()
    - Schema creation runs at most once, inside init_storage()
    - get_expense_repository() fails loudly before init_storage() has run
"""

import logging

from app.config import Settings
from app.core.domain_types import StorageBackend
from app.core.repository_protocols import ExpenseRepository
from app.infrastructure import database
from app.infrastructure.expense_repository import SqlAlchemyExpenseRepository
from app.infrastructure.memory_expense_repository import MemoryExpenseRepository

logger = logging.getLogger(__name__)

# Singleton (initialized on startup)
expense_repository: ExpenseRepository | None = None


async def init_storage(settings: Settings) -> ExpenseRepository:
    global expense_repository
    if settings.storage_backend is StorageBackend.MEMORY:
        expense_repository = MemoryExpenseRepository()
        logger.info("Using in-memory expense storage")
        return expense_repository

    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.auto_create_schema:
        await manager.create_schema()
        logger.info("Database schema ensured")
    expense_repository = SqlAlchemyExpenseRepository(manager)
    return expense_repository


async def shutdown_storage() -> None:
    global expense_repository
    await database.close_db()
    expense_repository = None


async def storage_ready() -> bool:
    """Readiness: in-memory storage is always ready; SQL storage must answer SELECT 1."""
    if isinstance(expense_repository, MemoryExpenseRepository):
        return True
    if database.db_manager is None:
        return False
    return await database.db_manager.health_check()


def get_expense_repository() -> ExpenseRepository:
    """FastAPI dependency for the Storage Port."""
    if expense_repository is None:
        raise RuntimeError("Storage not initialized")
    return expense_repository
