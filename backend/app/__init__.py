"""MyExpenses API — personal expense records over HTTP+JSON.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
