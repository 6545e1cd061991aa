"""In-Memory Schema Store — immutable snapshot satisfying the SchemaStore protocol.

Invariants:
    - Snapshot is built once and never mutated (no runtime schema mutation)
    - Lookups are exact on the unprefixed category name
    - Duplicate category names in the input: last one wins (matches dict semantics of documents)
"""

from typing import Iterable

from structuresync.core.schema_models import CategorySchema


class InMemorySchemaStore:
    """Dict-backed read-only schema store, one instance per request."""

    def __init__(self, schemas: Iterable[CategorySchema] = ()):
        self._schemas: dict[str, CategorySchema] = {s.name: s for s in schemas}

    def get_schema(self, category_name: str) -> CategorySchema | None:
        return self._schemas.get(category_name)

    def category_names(self) -> list[str]:
        return sorted(self._schemas)

    def __contains__(self, category_name: object) -> bool:
        return category_name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
