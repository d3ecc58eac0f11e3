"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate structure at the system boundary; business rules stay in core

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
