"""Services Layer — orchestration between the SQL schema store and the pure core.

Invariants:
    - Services load a fresh schema snapshot per request, then call core functions
    - No resolution logic lives here (delegates to core/)

Design Decisions:
    - Thin async wrappers around sync core calls (ADR: ExMA impureim sandwich)
"""
