"""Storage fixtures — every Storage Port test runs against both backends."""

import pytest

from app.infrastructure.expense_repository import SqlAlchemyExpenseRepository
from app.infrastructure.memory_expense_repository import MemoryExpenseRepository


@pytest.fixture(params=["sqlalchemy", "memory"])
def repository(request):
    if request.param == "memory":
        return MemoryExpenseRepository()
    db_manager = request.getfixturevalue("db_manager")
    return SqlAlchemyExpenseRepository(db_manager)
