"""Property Input Mapper — converts property metadata into creation-form input definitions.

Invariants:
    - Page-typed properties always map to a combobox (lookup/autocomplete)
    - Multi-value properties declare `list` plus the SAME delimiter the template splits on
    - `mandatory` is emitted only for required fields (optional fields omit it entirely)
    - Empty parameter values are never emitted

Design Decisions:
    - Hard datatype → input map with a `text` fallback: unknown types still get a usable input
"""

from structuresync.core.domain_types import Datatype, DEFAULT_MULTI_VALUE_DELIMITER
from structuresync.core.schema_models import PropertyDefinition

_INPUT_TYPES: dict[Datatype, str] = {
    Datatype.PAGE: "combobox",
    Datatype.TEXT: "text",
    Datatype.URL: "text",
    Datatype.EMAIL: "text",
    Datatype.TELEPHONE: "text",
    Datatype.NUMBER: "number",
    Datatype.QUANTITY: "text",
    Datatype.TEMPERATURE: "number",
    Datatype.DATE: "datepicker",
    Datatype.BOOLEAN: "checkbox",
    Datatype.CODE: "textarea",
    Datatype.GEOGRAPHIC_COORDINATE: "text",
}

_TEXT_LIKE = (Datatype.TEXT, Datatype.EMAIL, Datatype.URL, Datatype.TELEPHONE)


class PropertyInputMapper:
    """Map PropertyDefinition → form input type, parameters and definition string."""

    def __init__(self, delimiter: str = DEFAULT_MULTI_VALUE_DELIMITER):
        self.delimiter = delimiter

    def input_type(self, prop: PropertyDefinition) -> str:
        return _INPUT_TYPES.get(prop.datatype, "text")

    def input_parameters(self, prop: PropertyDefinition) -> dict[str, str]:
        """Ordered key=value parameters, excluding `mandatory`."""
        params: dict[str, str] = {}
        if prop.datatype in _TEXT_LIKE:
            params["size"] = "60"
        if prop.datatype is Datatype.CODE:
            params["rows"] = "10"
            params["cols"] = "80"
        if prop.datatype is Datatype.PAGE:
            params["autocomplete"] = "on"
        if prop.multi_value:
            params["list"] = ""
            params["delimiter"] = self.delimiter
        return params

    def input_definition(self, prop: PropertyDefinition, mandatory: bool | None = None) -> str:
        """'input type=text|size=60|mandatory' style definition."""
        params = self.input_parameters(prop)
        is_mandatory = prop.required if mandatory is None else mandatory

        segments = [f"input type={self.input_type(prop)}"]
        for key, value in params.items():
            if key == "list":
                segments.append("list")
            elif value:
                segments.append(f"{key}={value}")
        if is_mandatory:
            segments.append("mandatory")
        return "|".join(segments)
