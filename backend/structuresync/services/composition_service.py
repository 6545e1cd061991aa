"""Composition Service — runs the pure resolution pipeline over one schema snapshot.

Invariants:
    - One service instance per request, built over a freshly loaded snapshot
    - No partial results: any resolution error propagates before anything is rendered
    - Promotion warnings are returned AND logged at WARNING with category context
    - alphabetical=True sorts the selection before composing; otherwise input order rules

Design Decisions:
    - Impureim sandwich: the route loads the snapshot (impure), this service is pure,
      the route serializes (ADR: functional core / imperative shell)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from structuresync.config import Settings
from structuresync.core.composite_generator import CompositeGenerator
from structuresync.core.hierarchy import build_hierarchy
from structuresync.core.inheritance_resolver import InheritanceResolver
from structuresync.core.multi_category_resolver import MultiCategoryResolver
from structuresync.core.repository_protocols import SchemaStore
from structuresync.core.schema_models import ComposedSchema, PromotionWarning
from structuresync.core.schema_snapshot import composed_schema_to_dict, snapshot_digest
from structuresync.core.wikitext_renderer import WikitextRenderer
from structuresync.core.wire_format import (
    format_composed, format_effective, format_units, format_warnings,
)
from structuresync.infrastructure.sql_schema_store import load_schema_store

logger = logging.getLogger(__name__)


class CompositionService:
    """Effective schemas, hierarchy views, composition and generation for one snapshot."""

    def __init__(
        self,
        store: SchemaStore,
        delimiter: str = ";",
        name_separator: str = "+",
    ):
        self.store = store
        self.inheritance = InheritanceResolver(store)
        self.multi = MultiCategoryResolver(self.inheritance)
        self.generator = CompositeGenerator(delimiter=delimiter, name_separator=name_separator)
        self.renderer = WikitextRenderer(delimiter)

    def category_names(self) -> list[str]:
        return self.store.category_names()

    def effective_schema(self, category_name: str) -> dict:
        effective = self.inheritance.resolve(category_name)
        _log_warnings(effective.warnings, [category_name])
        return format_effective(effective)

    def hierarchy(self, category_name: str) -> dict:
        return build_hierarchy(self.inheritance, category_name)

    def compose(self, categories: list[str], alphabetical: bool = False) -> ComposedSchema:
        selection = sorted(categories) if alphabetical else list(categories)
        composed = self.multi.resolve(selection)
        _log_warnings(composed.warnings, composed.category_names)
        return composed

    def resolve(self, categories: list[str], alphabetical: bool = False) -> dict:
        return format_composed(self.compose(categories, alphabetical))

    def generate(self, categories: list[str], alphabetical: bool = False) -> dict:
        composed = self.compose(categories, alphabetical)
        artifacts = self.generator.build(composed)
        logger.info(
            f"Generated composite {artifacts.name}",
            extra={"composite": artifacts.name, "unit_count": len(artifacts.units)},
        )
        return {
            "name": artifacts.name,
            "categories": artifacts.category_names,
            "units": format_units(list(artifacts.units)),
            "rendered": self.renderer.render_artifacts(artifacts),
            "schema_hash": snapshot_digest(composed_schema_to_dict(composed)),
            "warnings": format_warnings(composed.warnings),
        }


async def load_composition_service(db: AsyncSession, settings: Settings) -> CompositionService:
    """Service over a snapshot of the stored schema."""
    store = await load_schema_store(db)
    return CompositionService(
        store,
        delimiter=settings.multi_value_delimiter,
        name_separator=settings.composite_name_separator,
    )


def _log_warnings(warnings: tuple[PromotionWarning, ...], categories: list[str]):
    for warning in warnings:
        logger.warning(
            warning.message,
            extra={
                "category": warning.category,
                "categories": categories,
                "warning_count": len(warnings),
            },
        )
