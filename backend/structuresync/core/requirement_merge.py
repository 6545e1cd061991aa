"""Requirement Merge — the {optional < required} lattice used by every resolver.

Invariants:
    - Merge is max over the lattice: req∨req=req, opt∨opt=opt, req∨opt=req
    - Merge is monotonic and order-independent for the flag; source order is kept for reporting
    - A warning is produced iff declarations disagree (and the result is then always required)
    - All functions are PURE: no IO, no raising on conflicts

Design Decisions:
    - One reducer shared by InheritanceResolver and MultiCategoryResolver, for both
      properties and subobjects (ADR: symmetry is a correctness invariant)
    - IntEnum lattice so max() is the join — no boolean special cases
"""

from dataclasses import dataclass
from enum import IntEnum
from functools import reduce
from typing import Iterable

from structuresync.core.domain_types import DeclarationKind
from structuresync.core.schema_models import PromotionWarning


class Requirement(IntEnum):
    """Two-point lattice; max() is the join."""
    OPTIONAL = 0
    REQUIRED = 1

    @classmethod
    def of(cls, required: bool) -> "Requirement":
        return cls.REQUIRED if required else cls.OPTIONAL


@dataclass(frozen=True)
class Declaration:
    """One category's required/optional stance on a name."""
    source: str
    required: bool


@dataclass(frozen=True)
class MergedRequirement:
    """Outcome of reducing every declaration of one name."""
    required: bool
    required_in: tuple[str, ...]
    optional_in: tuple[str, ...]

    @property
    def promoted(self) -> bool:
        return bool(self.required_in) and bool(self.optional_in)


def join(left: Requirement, right: Requirement) -> Requirement:
    return max(left, right)


def merge_requirement(declarations: Iterable[Declaration]) -> MergedRequirement:
    """Reduce declarations of a single name to one flag plus attribution."""
    declarations = list(declarations)
    level = reduce(
        join, (Requirement.of(d.required) for d in declarations), Requirement.OPTIONAL,
    )
    return MergedRequirement(
        required=level is Requirement.REQUIRED,
        required_in=_unique(d.source for d in declarations if d.required),
        optional_in=_unique(d.source for d in declarations if not d.required),
    )


def promotion_warning(
    kind: DeclarationKind, name: str, category: str, merged: MergedRequirement,
) -> PromotionWarning | None:
    """Warning record for a promoted name, None when declarations agreed."""
    if not merged.promoted:
        return None
    return PromotionWarning(
        kind=kind,
        name=name,
        category=category,
        required_in=merged.required_in,
        optional_in=merged.optional_in,
    )


def _unique(sources: Iterable[str]) -> tuple[str, ...]:
    """Stable de-duplication (first occurrence wins)."""
    return tuple(dict.fromkeys(sources))
