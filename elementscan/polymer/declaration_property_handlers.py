"""Handlers for the declaration keys that are not plain element properties."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from tree_sitter import Node

from ..javascript import ast_value, esutil
from ..logging import get_logger
from ..models import ElementDescriptor, Listener, Observer
from .analyze_properties import analyze_properties

logger = get_logger("polymer.handlers")

PropertyHandler = Callable[[ElementDescriptor, Node], None]


class HandledProperty(str, Enum):
    """Declaration keys routed to a handler instead of becoming properties."""

    IS = "is"
    PROPERTIES = "properties"
    BEHAVIORS = "behaviors"
    OBSERVERS = "observers"
    LISTENERS = "listeners"


def _file_of(element: ElementDescriptor) -> str:
    return element.source_range.file if element.source_range else ""


def _handle_is(element: ElementDescriptor, node: Node) -> None:
    if node.type == "string":
        element.tag_name = esutil.string_value(node)


def _handle_properties(element: ElementDescriptor, node: Node) -> None:
    for prop in analyze_properties(node, _file_of(element)):
        element.add_property(prop)


def _handle_behaviors(element: ElementDescriptor, node: Node) -> None:
    if node.type != "array":
        return
    for item in esutil.named_children(node):
        name = ast_value.get_identifier_name(item)
        if name is None:
            logger.debug("Skipping behavior that is not a plain identifier: %s", esutil.node_text(item))
            continue
        element.behaviors.append(name)


def _handle_observers(element: ElementDescriptor, node: Node) -> None:
    if node.type != "array":
        return
    for item in esutil.named_children(node):
        element.observers.append(Observer(node=item, expression=esutil.node_text(item)))


def _handle_listeners(element: ElementDescriptor, node: Node) -> None:
    if node.type != "object":
        logger.warning(
            "Expected an object literal for listeners at %s",
            esutil.get_source_range(node, _file_of(element)),
        )
        return
    for entry in esutil.named_children(node):
        if entry.type != "pair":
            continue
        event = esutil.object_key_to_string(entry.child_by_field_name("key"))
        value = entry.child_by_field_name("value")
        if event is None or value is None or value.type != "string":
            logger.warning(
                "Skipping listener with a non-literal event or handler at %s",
                esutil.get_source_range(entry, _file_of(element)),
            )
            continue
        element.listeners.append(Listener(event=event, handler=esutil.string_value(value)))


DECLARATION_PROPERTY_HANDLERS: Mapping[HandledProperty, PropertyHandler] = MappingProxyType(
    {
        HandledProperty.IS: _handle_is,
        HandledProperty.PROPERTIES: _handle_properties,
        HandledProperty.BEHAVIORS: _handle_behaviors,
        HandledProperty.OBSERVERS: _handle_observers,
        HandledProperty.LISTENERS: _handle_listeners,
    }
)


def lookup_handler(name: str) -> Optional[PropertyHandler]:
    """Return the handler registered for ``name``, if any."""
    try:
        key = HandledProperty(name)
    except ValueError:
        return None
    return DECLARATION_PROPERTY_HANDLERS[key]


__all__ = [
    "DECLARATION_PROPERTY_HANDLERS",
    "HandledProperty",
    "PropertyHandler",
    "lookup_handler",
]
