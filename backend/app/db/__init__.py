"""Database Primitives — declarative Base and portable column types.

Invariants:
    - No engine or session lives here (see infrastructure/database.py)
"""
