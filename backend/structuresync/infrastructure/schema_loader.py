"""Schema Loader — reads and writes schema documents as JSON or YAML text.

Invariants:
    - Every parse or IO failure surfaces as SchemaLoadError (never a raw yaml/json error)
    - The result is always a mapping; any other top-level value is rejected
    - Format is chosen by file suffix; bare text is tried as JSON first, then YAML
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from structuresync.core.errors import SchemaLoadError

logger = logging.getLogger(__name__)


class DocumentFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"


_SUFFIXES = {
    ".json": DocumentFormat.JSON,
    ".yaml": DocumentFormat.YAML,
    ".yml": DocumentFormat.YAML,
}


def parse_document(content: str, fmt: DocumentFormat | None = None, source: str = "document") -> dict[str, Any]:
    """Parse schema document text; fmt=None sniffs JSON, then YAML."""
    if fmt is None:
        fmt = DocumentFormat.JSON if content.lstrip().startswith("{") else DocumentFormat.YAML
    try:
        if fmt is DocumentFormat.JSON:
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaLoadError(f"invalid {fmt.value}: {e}", source)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SchemaLoadError("top-level value must be a mapping", source)
    return data


def load_file(path: str | Path) -> dict[str, Any]:
    """Read and parse a schema file (.json, .yaml, .yml)."""
    path = Path(path)
    fmt = _SUFFIXES.get(path.suffix.lower())
    if fmt is None:
        raise SchemaLoadError(f"unsupported file type '{path.suffix}'", str(path))
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaLoadError(str(e), str(path))
    logger.info(f"Loading schema document from {path}", extra={"path": str(path)})
    return parse_document(content, fmt, source=str(path))


def dump_document(document: dict[str, Any], fmt: DocumentFormat) -> str:
    """Serialize a schema document; key order is kept so exports stay diff-friendly."""
    if fmt is DocumentFormat.JSON:
        return json.dumps(document, indent=2, ensure_ascii=False)
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
