"""Wikitext Renderer — default TemplateRenderer / FormRenderer emitting wiki markup.

Invariants:
    - Output is a pure function of the units (same units → identical text)
    - Templates only assemble precomputed GeneratedField snippets (guards and
      delimiters are decided once, in the composite generator)
    - Every unit appears in the form, even with zero fields, so the page still
      joins that unit's category
    - Subobject instances emit nothing when all of their parameters are empty
    - Every embedded subobject section has a matching "holds template" field in its
      parent template section, named by the subobject's holder parameter

Design Decisions:
    - One class for both protocols: they share header and section helpers
      (ADR: ExMA max 3-4 files to understand a feature)
"""

from typing import Sequence

from structuresync.core.domain_types import DEFAULT_MULTI_VALUE_DELIMITER
from structuresync.core.generation_models import (
    CompositeArtifacts, GeneratedField, GeneratedSubobject, GenerationUnit,
)
from structuresync.core.naming import category_title

_GENERATED_MARKER = "<!-- AUTO-GENERATED by StructureSync -->"


class WikitextRenderer:
    """Render unit templates, subobject templates and the composite form."""

    def __init__(self, delimiter: str = DEFAULT_MULTI_VALUE_DELIMITER):
        self.delimiter = delimiter

    # --- TemplateRenderer ------------------------------------------------------

    def render_template(self, unit: GenerationUnit) -> str:
        lines = [
            "<noinclude>",
            _GENERATED_MARKER,
            f"<!-- Template for [[:{category_title(unit.category)}]] "
            f"(identity {unit.identity_key}) -->",
            "</noinclude><includeonly>",
        ]
        lines.extend(f.template_call for f in unit.fields)
        for subobject in unit.subobjects:
            holder = subobject.parameter
            lines.append(f"{{{{#if:{{{{{{{holder}|}}}}}}|{{{{{{{holder}|}}}}}}}}}}")
        lines.append(f"[[{category_title(unit.category)}]]")
        lines.append("</includeonly>")
        return "\n".join(lines)

    def render_subobject_template(self, subobject: GeneratedSubobject) -> str:
        """Template for one subobject instance, guarded as a whole."""
        any_value = "".join(f"{{{{{{{f.parameter}|}}}}}}" for f in subobject.fields)
        assignments = [f"|@category={subobject.name}"]
        for f in subobject.fields:
            assignment = f"|{f.name}={{{{{{{f.parameter}|}}}}}}"
            if f.multi_value:
                assignment += f"|+sep={self.delimiter}"
            assignments.append(assignment)
        lines = [
            "<noinclude>",
            _GENERATED_MARKER,
            f"<!-- Subobject template for {subobject.name} -->",
            "</noinclude><includeonly>",
            f"{{{{#if:{any_value}|{{{{#subobject:",
            *assignments,
            "}}}}",
            "</includeonly>",
        ]
        return "\n".join(lines)

    # --- FormRenderer ----------------------------------------------------------

    def render_form(self, form_name: str, units: Sequence[GenerationUnit]) -> str:
        lines = [
            "<noinclude>",
            _GENERATED_MARKER,
            f"This is the \"{form_name}\" form.",
            f"{{{{#forminput:form={form_name}}}}}",
            "</noinclude><includeonly>",
        ]
        for unit in units:
            lines.extend(self._form_section(unit))
        lines.extend([
            "'''Free text:'''",
            "{{{standard input|free text|rows=10}}}",
            "{{{standard input|summary}}}",
            "{{{standard input|save}}} {{{standard input|preview}}} {{{standard input|cancel}}}",
            "</includeonly>",
        ])
        return "\n".join(lines)

    def render_artifacts(self, artifacts: CompositeArtifacts) -> dict:
        """Every rendered text of a composite, keyed by page name."""
        templates = {u.template_name: self.render_template(u) for u in artifacts.units}
        subobject_templates = {
            f"Subobject/{s.name}": self.render_subobject_template(s)
            for u in artifacts.units for s in u.subobjects
        }
        return {
            "form": self.render_form(artifacts.name, artifacts.units),
            "templates": templates,
            "subobject_templates": subobject_templates,
        }

    # --- Helpers ---------------------------------------------------------------

    def _form_section(self, unit: GenerationUnit) -> list[str]:
        lines = [f"{{{{{{for template|{unit.template_name}}}}}}}"]
        if unit.fields:
            lines.append(f"== {unit.category} ==")
            lines.extend(_field_table(unit.fields))
        lines.extend(
            f"{{{{{{field|{s.parameter}|holds template}}}}}}" for s in unit.subobjects
        )
        lines.append("{{{end template}}}")
        for subobject in unit.subobjects:
            lines.extend(self._subobject_section(unit, subobject))
        return lines

    def _subobject_section(self, unit: GenerationUnit, subobject: GeneratedSubobject) -> list[str]:
        holder = subobject.parameter
        options = [
            f"Subobject/{subobject.name}",
            "multiple",
            f"embed in field={unit.template_name}[{holder}]",
            f"label={subobject.name}",
        ]
        if subobject.required:
            options.append("minimum instances=1")
        return [
            f"{{{{{{for template|{'|'.join(options)}}}}}}}",
            *_field_table(subobject.fields),
            "{{{end template}}}",
        ]


def _field_table(fields: Sequence[GeneratedField]) -> list[str]:
    lines = ['{| class="formtable"']
    for f in fields:
        marker = " *" if f.required else ""
        lines.append(f"! {f.label}{marker}:")
        lines.append(f"| {f.form_input}")
        lines.append("|-")
    if fields:
        lines.pop()
    lines.append("|}")
    return lines
