"""Naming Helpers — page-name normalization shared by resolvers, generator and API.

Invariants:
    - strip_category_prefix is case-insensitive and trims surrounding whitespace
    - property_to_parameter is identical for templates, forms and display output
"""

import re

from structuresync.core.domain_types import (
    CATEGORY_NAMESPACE, PROPERTY_NAMESPACE, SUBOBJECT_NAMESPACE,
)

_CATEGORY_PREFIX_RE = re.compile(rf"^{CATEGORY_NAMESPACE}:\s*", re.IGNORECASE)


def strip_category_prefix(name: str) -> str:
    """'Category:Person' / ' category:Person ' / 'Person' → 'Person'."""
    return _CATEGORY_PREFIX_RE.sub("", name.strip()).strip()


def normalize_selection(names: list[str]) -> list[str]:
    """Strip prefixes and drop blanks, keeping order."""
    cleaned = (strip_category_prefix(n) for n in names)
    return [n for n in cleaned if n]


def property_to_parameter(property_name: str) -> str:
    """Template parameter for a property: 'Has full name' → 'full_name'."""
    param = property_name
    if param.startswith("Has "):
        param = param[4:]
    param = param.replace(":", "_")
    return param.strip().lower().replace(" ", "_")


def property_to_label(property_name: str) -> str:
    if property_name.startswith("Has "):
        return property_name[4:]
    return property_name


def category_title(name: str) -> str:
    return f"{CATEGORY_NAMESPACE}:{name}"


def property_title(name: str) -> str:
    return f"{PROPERTY_NAMESPACE}:{name}"


def subobject_title(name: str) -> str:
    return f"{SUBOBJECT_NAMESPACE}:{name}"
