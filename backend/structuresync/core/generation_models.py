"""Generation Models — rendering-ready units produced by the composite generator.

Invariants:
    - One GenerationUnit per selected category, in composed order
    - Only the first unit is primary; it also carries every shared field
    - Each field/subobject name appears in exactly one unit of a CompositeArtifacts
    - Parameters are unique within a unit (fields plus subobject holders) and within
      each subobject template
    - identity_key is stable for the same category and field set

Design Decisions:
    - Snippets are precomputed on the field (template_call, form_input) so renderers
      only assemble text and never re-derive guards or delimiters
"""

from dataclasses import dataclass

from structuresync.core.domain_types import Datatype


@dataclass(frozen=True)
class GeneratedField:
    """A property rendered for one unit."""
    name: str
    parameter: str
    label: str
    datatype: Datatype
    required: bool
    multi_value: bool
    shared: bool
    owner: str
    sources: tuple[str, ...]
    input_type: str
    input_definition: str
    template_call: str
    form_input: str


@dataclass(frozen=True)
class GeneratedSubobject:
    """A subobject rendered for one unit, with its own nested fields.

    `parameter` is the holder field of the parent template that embeds the instances.
    """
    name: str
    required: bool
    shared: bool
    owner: str
    sources: tuple[str, ...]
    fields: tuple[GeneratedField, ...] = ()
    parameter: str = ""


@dataclass(frozen=True)
class GenerationUnit:
    """Per-category slice used to emit one template and one form section."""
    category: str
    fields: tuple[GeneratedField, ...] = ()
    subobjects: tuple[GeneratedSubobject, ...] = ()
    is_primary: bool = False
    identity_key: str = ""

    @property
    def template_name(self) -> str:
        return self.category

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def subobject_names(self) -> list[str]:
        return [s.name for s in self.subobjects]


@dataclass(frozen=True)
class CompositeArtifacts:
    """Composite form name plus its ordered units."""
    name: str
    units: tuple[GenerationUnit, ...] = ()

    @property
    def category_names(self) -> list[str]:
        return [u.category for u in self.units]
