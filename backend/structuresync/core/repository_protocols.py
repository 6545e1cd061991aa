"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - SchemaStore is read-only: the core never writes schemas
    - Lookups are synchronous: the shell loads a snapshot before calling the core

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - Sync in Protocol: unlike repositories doing IO per call, the shell materializes
      an InMemorySchemaStore per request, so the pure resolvers never await
"""

from typing import Protocol, Sequence

from structuresync.core.schema_models import CategorySchema
from structuresync.core.generation_models import GenerationUnit


class SchemaStore(Protocol):
    """Contract for raw category schema lookup — implemented by InMemorySchemaStore."""
    def get_schema(self, category_name: str) -> CategorySchema | None: ...
    def category_names(self) -> list[str]: ...


class TemplateRenderer(Protocol):
    """Contract for emitting one display/edit template per generation unit."""
    def render_template(self, unit: GenerationUnit) -> str: ...


class FormRenderer(Protocol):
    """Contract for emitting one composite creation form from ordered units."""
    def render_form(self, form_name: str, units: Sequence[GenerationUnit]) -> str: ...
