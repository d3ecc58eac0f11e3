"""API test fixtures — FastAPI app over an in-memory SQLite Storage Port.

Invariants:
    - get_expense_repository overridden; lifespan never runs, so no PostgreSQL
    - Overrides cleared after every test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.infrastructure.expense_repository import SqlAlchemyExpenseRepository
from app.infrastructure.storage import get_expense_repository
from app.main import app


@pytest.fixture
async def client(db_manager):
    """FastAPI test client with the Storage Port overridden."""
    repository = SqlAlchemyExpenseRepository(db_manager)
    app.dependency_overrides[get_expense_repository] = lambda: repository

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
