"""Health & readiness probes."""

from app.infrastructure import storage
from app.infrastructure.memory_expense_repository import MemoryExpenseRepository


async def test_liveness(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "service": "MyExpenses API"}


async def test_readiness_without_storage_is_503(client, monkeypatch):
    monkeypatch.setattr(storage, "expense_repository", None)
    monkeypatch.setattr(storage.database, "db_manager", None)
    res = await client.get("/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "storage_unavailable"


async def test_readiness_with_database(client, monkeypatch, db_manager):
    monkeypatch.setattr(storage.database, "db_manager", db_manager)
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["status"] == "ready"


async def test_readiness_with_memory_storage(client, monkeypatch):
    monkeypatch.setattr(storage, "expense_repository", MemoryExpenseRepository())
    res = await client.get("/health/ready")
    assert res.status_code == 200
