"""Schema Seed Script — imports a JSON/YAML schema file into the database.

Usage:
    python -m structuresync.seed schema.yaml [--database-url URL] [--create-tables] [--force]

Invariants:
    - Without --force, an already-populated store is left untouched
    - Validation errors are printed one per line and exit with status 1
"""

import argparse
import asyncio
import logging
import sys

from structuresync.config import get_settings
from structuresync.core.errors import StructureSyncError
from structuresync.db.base import Base
from structuresync.db.session import create_session_factory
from structuresync.infrastructure.observability import setup_logging
from structuresync.infrastructure.schema_loader import load_file
from structuresync.services.schema_service import import_schema, seed_if_empty
import structuresync.models  # noqa: F401

logger = logging.getLogger(__name__)


async def run_seed(
    path: str, database_url: str, create_tables: bool = False, force: bool = False,
) -> dict | None:
    """Import `path` and return the import summary (None when skipped)."""
    factory = create_session_factory(database_url)
    engine = factory.kw["bind"]
    try:
        if create_tables:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        async with factory() as db:
            if force:
                return await import_schema(db, load_file(path))
            return await seed_if_empty(db, path)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Import a StructureSync schema file.")
    parser.add_argument("path")
    parser.add_argument("--database-url", default=settings.database_url)
    parser.add_argument("--create-tables", action="store_true")
    parser.add_argument("--force", action="store_true", help="replace a non-empty store")
    args = parser.parse_args(argv)

    setup_logging(settings.log_level, "text")
    try:
        result = asyncio.run(
            run_seed(args.path, args.database_url, args.create_tables, args.force),
        )
    except StructureSyncError as e:
        print(e.message, file=sys.stderr)
        for message in getattr(e, "errors", []):
            print(f"  - {message}", file=sys.stderr)
        return 1

    if result is None:
        print("Schema store already populated; nothing imported (use --force).")
    else:
        counts = result["imported"]
        print(
            f"Imported {counts['categories']} categories, "
            f"{counts['properties']} properties, {counts['subobjects']} subobjects."
        )
        for warning in result["warnings"]:
            print(f"  warning: {warning}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
