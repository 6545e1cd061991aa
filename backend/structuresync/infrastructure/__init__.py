"""Infrastructure Layer — database access, document loading, and logging setup.

Invariants:
    - Infrastructure may import core/ types, never the other way around
    - All SQLAlchemy and parser exceptions mapped to core/errors.py types

Design Decisions:
    - Adapters return core value objects (ADR: ExMA dependency arrows point inward)
"""
