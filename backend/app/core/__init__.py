"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Entity validation, filter semantics and the error taxonomy live here

Design Decisions:
    - Functional core separated from imperative shell
"""
