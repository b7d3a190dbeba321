"""Conversion of a declaration's ``properties`` block into property records."""

from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node

from ..errors import UnresolvableKeyError
from ..javascript import ast_value, esutil
from ..logging import get_logger
from ..models import PropertyDescriptor
from . import docs

logger = get_logger("polymer.properties")

# Constructor names used as property types, normalised to Closure primitives.
_PRIMITIVE_TYPES = {
    "String": "string",
    "Number": "number",
    "Boolean": "boolean",
}


def analyze_properties(node: Node, file: str = "") -> List[PropertyDescriptor]:
    """Return published properties described by a ``properties: {...}`` value."""
    if node.type != "object":
        logger.warning(
            "Expected an object literal for properties at %s, got %s",
            esutil.get_source_range(node, file),
            node.type,
        )
        return []

    results: List[PropertyDescriptor] = []
    for entry in esutil.named_children(node):
        name = esutil.object_key_to_string(esutil.property_key(entry))
        if name is None:
            raise UnresolvableKeyError(
                "Can't determine name for property key.", esutil.get_source_range(entry, file)
            )
        prop = esutil.to_property_descriptor(entry, file, name)
        prop.published = True
        prop.function = False
        prop.params = []
        value = esutil.entry_value(entry)
        if value is not None and value.type == "object":
            prop.type = None
            _apply_options(prop, value)
        else:
            prop.type = _type_name(value)
        results.append(docs.annotate_property(prop))
    return results


def _apply_options(prop: PropertyDescriptor, options: Node) -> None:
    for entry in esutil.named_children(options):
        if entry.type != "pair":
            continue
        key = esutil.object_key_to_string(entry.child_by_field_name("key"))
        value = entry.child_by_field_name("value")
        if key is None or value is None:
            continue
        if key == "type":
            prop.type = _type_name(value)
        elif key == "value":
            prop.default = esutil.node_text(value)
        elif key == "notify":
            prop.notify = ast_value.expression_to_value(value) is True
        elif key == "readOnly":
            prop.read_only = ast_value.expression_to_value(value) is True
        elif key == "reflectToAttribute":
            prop.reflect_to_attribute = ast_value.expression_to_value(value) is True
        elif key == "observer":
            prop.observer = _string_or_name(value)
        elif key == "computed":
            prop.computed = _string_or_name(value)
        else:
            logger.debug("Ignoring unknown property option %r on %s", key, prop.name)


def _type_name(node: Optional[Node]) -> Optional[str]:
    name = ast_value.get_identifier_name(node)
    if name is None:
        return None
    return _PRIMITIVE_TYPES.get(name, name)


def _string_or_name(node: Node) -> Optional[str]:
    if node.type == "string":
        return esutil.string_value(node)
    return ast_value.get_identifier_name(node)


__all__ = ["analyze_properties"]
