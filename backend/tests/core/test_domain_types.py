"""Domain Types — identifier wrapper and storage backend enum."""

from uuid import UUID

from app.core.domain_types import ExpenseId, StorageBackend, new_expense_id


def test_new_expense_id_is_unique_uuid():
    first, second = new_expense_id(), new_expense_id()
    assert isinstance(first, UUID)
    assert first != second


def test_expense_id_wraps_uuid():
    uid = new_expense_id()
    assert ExpenseId(uid) == uid


def test_storage_backend_values():
    assert StorageBackend("postgres") is StorageBackend.POSTGRES
    assert StorageBackend.MEMORY.value == "memory"
    assert StorageBackend.MEMORY == "memory"
