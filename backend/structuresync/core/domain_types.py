"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CategoryName, PropertyName, SubobjectName are wiki page names WITHOUT namespace prefix
    - Every property resolves to exactly one Datatype; unknown or missing labels resolve to PAGE
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (ADR: wire format is JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CategoryName = NewType("CategoryName", str)
PropertyName = NewType("PropertyName", str)
SubobjectName = NewType("SubobjectName", str)


# ─── Constants ───────────────────────────────────────────────────

CATEGORY_NAMESPACE = "Category"
PROPERTY_NAMESPACE = "Property"
SUBOBJECT_NAMESPACE = "Subobject"

DEFAULT_MULTI_VALUE_DELIMITER = ";"
DEFAULT_COMPOSITE_SEPARATOR = "+"
IDENTITY_HASH_LENGTH = 12

PROMOTION_WORDING = "promoted to required"


# ─── Enums ───────────────────────────────────────────────────────

class Datatype(str, Enum):
    """Semantic property datatypes. Values are the wiki type labels."""
    PAGE = "Page"
    TEXT = "Text"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    DATE = "Date"
    EMAIL = "Email"
    URL = "URL"
    TELEPHONE = "Telephone number"
    CODE = "Code"
    QUANTITY = "Quantity"
    TEMPERATURE = "Temperature"
    GEOGRAPHIC_COORDINATE = "Geographic coordinate"

    @classmethod
    def parse(cls, value: "str | Datatype | None") -> "Datatype":
        """Resolve a datatype label, falling back to PAGE for missing/unknown labels."""
        if isinstance(value, Datatype):
            return value
        if not value:
            return cls.PAGE
        label = str(value).strip()
        for member in cls:
            if member.value.casefold() == label.casefold():
                return member
        return cls.PAGE

    @classmethod
    def is_known(cls, value: str | None) -> bool:
        """Whether a label names a supported datatype (case-insensitive)."""
        if not value:
            return False
        return any(m.value.casefold() == value.strip().casefold() for m in cls)


class DeclarationKind(str, Enum):
    """What a schema declaration names — properties and subobjects share all merge rules."""
    PROPERTY = "property"
    SUBOBJECT = "subobject"
