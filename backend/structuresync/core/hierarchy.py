"""Category Hierarchy — ancestor tree and inherited declarations for one category.

Invariants:
    - Nodes are keyed by namespaced title ("Category:X"), most specific first
    - Each node lists at most one parent (single inheritance)
    - Inherited entries keep the category that FIRST declared the name as source,
      and the merged (promoted) required flag
    - Unknown or cyclic categories raise, like every other resolution
"""

from structuresync.core.inheritance_resolver import InheritanceResolver
from structuresync.core.naming import category_title, property_title, subobject_title


def build_hierarchy(resolver: InheritanceResolver, category_name: str) -> dict:
    """Hierarchy view: {rootCategory, nodes, inheritedProperties, inheritedSubobjects}."""
    effective = resolver.resolve(category_name)
    chain = list(effective.ancestry)

    nodes = {}
    for index in range(len(chain) - 1, -1, -1):
        title = category_title(chain[index])
        parents = [category_title(chain[index - 1])] if index > 0 else []
        nodes[title] = {"title": title, "parents": parents}

    return {
        "rootCategory": category_title(category_name),
        "nodes": nodes,
        "inheritedProperties": [
            {
                "propertyTitle": property_title(p.name),
                "sourceCategory": category_title(effective.property_origins[p.name]),
                "required": int(p.required),
            }
            for p in effective.properties
        ],
        "inheritedSubobjects": [
            {
                "subobjectTitle": subobject_title(s.name),
                "sourceCategory": category_title(effective.subobject_origins[s.name]),
                "required": int(s.required),
            }
            for s in effective.subobjects
        ],
    }
