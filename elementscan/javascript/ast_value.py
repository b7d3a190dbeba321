"""Static evaluation of simple JavaScript expression nodes."""

from __future__ import annotations

from typing import Optional, Union

from tree_sitter import Node

from .esutil import named_children, node_text, string_value


class _CantConvert:
    def __repr__(self) -> str:
        return "CANT_CONVERT"


CANT_CONVERT = _CantConvert()

LiteralValue = Union[str, float, bool, None]


def get_identifier_name(node: Optional[Node]) -> Optional[str]:
    """Resolve ``Foo`` or ``Foo.Bar.Baz`` to its dotted name."""
    if node is None:
        return None
    if node.type == "identifier":
        return node_text(node)
    if node.type == "member_expression":
        obj = get_identifier_name(node.child_by_field_name("object"))
        prop = node.child_by_field_name("property")
        if obj is None or prop is None or prop.type != "property_identifier":
            return None
        return f"{obj}.{node_text(prop)}"
    return None


def expression_to_value(node: Optional[Node]) -> Union[LiteralValue, _CantConvert]:
    """Evaluate a literal expression, or return :data:`CANT_CONVERT`."""
    if node is None:
        return CANT_CONVERT
    kind = node.type
    if kind == "string":
        return string_value(node)
    if kind == "number":
        try:
            return float(int(node_text(node), 0))
        except ValueError:
            try:
                return float(node_text(node))
            except ValueError:
                return CANT_CONVERT
    if kind == "true":
        return True
    if kind == "false":
        return False
    if kind == "null":
        return None
    if kind == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return CANT_CONVERT
        return node_text(node)[1:-1]
    if kind == "parenthesized_expression":
        inner = named_children(node)
        return expression_to_value(inner[0]) if len(inner) == 1 else CANT_CONVERT
    if kind == "unary_expression":
        operator = node.child_by_field_name("operator")
        value = expression_to_value(node.child_by_field_name("argument"))
        if operator is not None and node_text(operator) == "-" and isinstance(value, float):
            return -value
        if operator is not None and node_text(operator) == "!" and not isinstance(value, _CantConvert):
            return not value
        return CANT_CONVERT
    return CANT_CONVERT


__all__ = ["CANT_CONVERT", "expression_to_value", "get_identifier_name"]
