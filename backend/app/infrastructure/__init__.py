"""Infrastructure Layer — storage adapters and cross-cutting concerns.

Invariants:
    - Implements core protocols; core never imports from here
    - All database failures are mapped to core StorageError before leaving this layer
"""
