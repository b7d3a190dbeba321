"""Helpers for inspecting tree-sitter JavaScript nodes."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from tree_sitter import Node

from ..errors import UnresolvableKeyError
from ..models import EventDescriptor, Position, PropertyDescriptor, SourceRange
from . import jsdoc

# Nodes whose doc comment sits on an enclosing statement rather than on the node itself.
_COMMENT_HOSTS = {
    "export_statement",
    "expression_statement",
    "lexical_declaration",
    "variable_declaration",
    "variable_declarator",
}

_FUNCTION_TYPES = {
    "arrow_function",
    "function",
    "function_expression",
    "generator_function",
    "method_definition",
}

_LITERAL_TYPES = {
    "object": "Object",
    "array": "Array",
    "string": "string",
    "template_string": "string",
    "number": "number",
    "true": "boolean",
    "false": "boolean",
    "null": "null",
    "undefined": "undefined",
    "regex": "RegExp",
    "class": "Function",
}


def node_text(node: Node) -> str:
    text = node.text
    return text.decode("utf-8", errors="replace") if text is not None else ""


_ESCAPES = {
    "\\n": "\n",
    "\\t": "\t",
    "\\r": "\r",
    "\\b": "\b",
    "\\f": "\f",
    "\\v": "\v",
    "\\0": "\0",
}


def string_value(node: Node) -> str:
    """Return the runtime value of a ``string`` node."""
    parts = []
    for child in node.children:
        if child.type == "string_fragment":
            parts.append(node_text(child))
        elif child.type == "escape_sequence":
            raw = node_text(child)
            parts.append(_ESCAPES.get(raw, raw[1:]))
    return "".join(parts)


def named_children(node: Node) -> List[Node]:
    """Named children of ``node`` without interleaved comments."""
    return [child for child in node.named_children if child.type != "comment"]


def get_source_range(node: Optional[Node], file: str = "") -> Optional[SourceRange]:
    if node is None:
        return None
    start_row, start_column = node.start_point[0], node.start_point[1]
    end_row, end_column = node.end_point[0], node.end_point[1]
    return SourceRange(
        file=file,
        start=Position(line=start_row, column=start_column),
        end=Position(line=end_row, column=end_column),
    )


def leading_comments(node: Node) -> List[Node]:
    """Comment nodes directly preceding ``node``, in source order."""
    comments: List[Node] = []
    sibling = node.prev_sibling
    while sibling is not None and sibling.type == "comment":
        comments.append(sibling)
        sibling = sibling.prev_sibling
    comments.reverse()
    return comments


def get_attached_comment(node: Optional[Node]) -> Optional[str]:
    """Return the cleaned text of the JSDoc comment attached to ``node``."""
    while node is not None:
        comments = [c for c in leading_comments(node) if jsdoc.is_jsdoc(node_text(c))]
        if comments:
            return jsdoc.clean_comment(node_text(comments[-1]))
        parent = node.parent
        if parent is None or parent.type not in _COMMENT_HOSTS:
            return None
        node = parent
    return None


def _iter_comments(node: Node) -> Iterator[Node]:
    yield from leading_comments(node)
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "comment":
            yield current
            continue
        stack.extend(reversed(current.children))


def get_event_comments(node: Optional[Node]) -> List[EventDescriptor]:
    """Collect ``@event`` comments found on or inside ``node``."""
    if node is None:
        return []
    seen: Dict[str, None] = {}
    for comment in _iter_comments(node):
        text = node_text(comment)
        if "@event" in text:
            seen.setdefault(text, None)

    events: Dict[str, EventDescriptor] = {}
    for text in seen:
        annotation = jsdoc.parse_jsdoc(jsdoc.clean_comment(text))
        tag = annotation.get_tag("event")
        if tag is None or not tag.name:
            continue
        params = [
            {"name": param.name, "type": param.type, "description": param.description}
            for param in annotation.get_tags("param")
        ]
        description = annotation.description or (tag.description or "")
        events.setdefault(tag.name, EventDescriptor(name=tag.name, description=description, params=params))
    return sorted(events.values(), key=lambda event: event.name)


def property_key(node: Node) -> Optional[Node]:
    """Return the key node of an object/class body entry, if it has one."""
    if node.type == "pair":
        return node.child_by_field_name("key")
    if node.type in {"method_definition", "field_definition"}:
        return node.child_by_field_name("name") or node.child_by_field_name("property")
    if node.type == "shorthand_property_identifier":
        return node
    return None


def object_key_to_string(key: Optional[Node]) -> Optional[str]:
    """Resolve a property key to a static string, or ``None``."""
    if key is None:
        return None
    kind = key.type
    if kind in {"property_identifier", "identifier", "shorthand_property_identifier", "private_property_identifier"}:
        return node_text(key)
    if kind == "string":
        return string_value(key)
    if kind == "number":
        return node_text(key)
    if kind == "computed_property_name":
        inner = named_children(key)
        if len(inner) == 1 and inner[0].type in {"string", "number"}:
            return object_key_to_string(inner[0])
    return None


def accessor_kind(node: Node) -> Optional[str]:
    """Return ``"get"`` or ``"set"`` for accessor method definitions."""
    if node.type != "method_definition":
        return None
    name = node.child_by_field_name("name")
    for child in node.children:
        if name is not None and child.start_byte >= name.start_byte:
            break
        if child.type in {"get", "set"}:
            return child.type
    return None


def entry_value(node: Node) -> Optional[Node]:
    if node.type == "pair":
        return node.child_by_field_name("value")
    return node


def closure_type(node: Optional[Node]) -> str:
    """Infer a Closure-style type name from a value expression."""
    if node is None:
        return "?"
    if node.type in _FUNCTION_TYPES:
        return "Function"
    if node.type in _LITERAL_TYPES:
        return _LITERAL_TYPES[node.type]
    if node.type == "identifier":
        return "undefined" if node_text(node) == "undefined" else "?"
    if node.type == "new_expression":
        constructor = node.child_by_field_name("constructor")
        if constructor is not None and constructor.type == "identifier":
            return node_text(constructor)
    return "?"


def function_params(node: Optional[Node]) -> List[str]:
    if node is None:
        return []
    single = node.child_by_field_name("parameter")
    if single is not None:
        return [node_text(single)]
    parameters = node.child_by_field_name("parameters")
    if parameters is None:
        return []
    names: List[str] = []
    for param in named_children(parameters):
        if param.type == "assignment_pattern":
            left = param.child_by_field_name("left")
            names.append(node_text(left) if left is not None else node_text(param))
        else:
            names.append(node_text(param))
    return names


def to_property_descriptor(
    node: Node, file: str = "", name: Optional[str] = None
) -> PropertyDescriptor:
    """Build an unclassified property record from an object or class body entry."""
    if name is None:
        name = object_key_to_string(property_key(node))
    if name is None:
        raise UnresolvableKeyError(
            "Can't determine name for property key.", get_source_range(node, file)
        )
    value = entry_value(node)
    kind = accessor_kind(node)
    prop_type: Optional[str] = closure_type(value)
    is_function = prop_type == "Function"
    if kind is not None:
        prop_type = None
        is_function = False
    return PropertyDescriptor(
        name=name,
        type=prop_type,
        description=get_attached_comment(node) or "",
        getter=kind == "get",
        setter=kind == "set",
        function=is_function,
        params=function_params(value) if is_function else [],
        source_range=get_source_range(node, file),
        node=node,
    )


__all__ = [
    "accessor_kind",
    "closure_type",
    "entry_value",
    "function_params",
    "get_attached_comment",
    "get_event_comments",
    "get_source_range",
    "leading_comments",
    "named_children",
    "node_text",
    "object_key_to_string",
    "property_key",
    "string_value",
    "to_property_descriptor",
]
