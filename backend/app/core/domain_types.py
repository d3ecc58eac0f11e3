"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ExpenseId wraps UUID; ids are generated server-side, never by callers
    - StorageBackend enumerates the supported Storage Port implementations

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and env values without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID, uuid4


# ─── Identity Types ──────────────────────────────────────────────

ExpenseId = NewType("ExpenseId", UUID)


def new_expense_id() -> ExpenseId:
    return ExpenseId(uuid4())


# ─── Enums ───────────────────────────────────────────────────────

class StorageBackend(str, Enum):
    """Storage Port implementation selected at startup."""
    POSTGRES = "postgres"
    MEMORY = "memory"
