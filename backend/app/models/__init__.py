"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Importing this package registers every table on Base.metadata

Design Decisions:
    - ORM rows are separate from core entities; repositories map between them
"""

from app.models.expense import Expense  # noqa: F401
