"""Services Layer — use-case orchestration between routes and the Storage Port.

Invariants:
    - Services hold no per-request state
    - Services never import FastAPI or SQLAlchemy
"""
