"""Tests for the declaration handler table."""

from __future__ import annotations

from elementscan.models import ElementDescriptor
from elementscan.polymer.declaration_property_handlers import (
    DECLARATION_PROPERTY_HANDLERS,
    HandledProperty,
    lookup_handler,
)
from tests._fixtures.syntax import find_first, parse


def test_every_handled_property_has_a_handler() -> None:
    assert set(DECLARATION_PROPERTY_HANDLERS) == set(HandledProperty)


def test_lookup_handler_only_matches_recognized_names() -> None:
    assert lookup_handler("is") is DECLARATION_PROPERTY_HANDLERS[HandledProperty.IS]
    assert lookup_handler("label") is None
    assert lookup_handler("IS") is None


def test_is_handler_ignores_non_literal_values() -> None:
    element = ElementDescriptor()
    document = parse("x = tagName;")

    lookup_handler("is")(element, find_first(document.root_node, "identifier"))

    assert element.tag_name is None


def test_behaviors_handler_keeps_identifier_names_in_order() -> None:
    element = ElementDescriptor()
    document = parse("x = [First, Ns.Second, makeBehavior(), Third];")

    lookup_handler("behaviors")(element, find_first(document.root_node, "array"))

    assert element.behaviors == ["First", "Ns.Second", "Third"]


def test_observers_handler_keeps_literal_text() -> None:
    element = ElementDescriptor()
    document = parse("x = ['a(b)', \"c(d.*)\"];")

    lookup_handler("observers")(element, find_first(document.root_node, "array"))

    assert [observer.expression for observer in element.observers] == ["'a(b)'", '"c(d.*)"']


def test_listeners_handler_skips_non_literal_handlers() -> None:
    element = ElementDescriptor()
    document = parse("x = {tap: '_onTap', 'iron-resize': '_onResize', click: handler};")

    lookup_handler("listeners")(element, find_first(document.root_node, "object"))

    assert [(listener.event, listener.handler) for listener in element.listeners] == [
        ("tap", "_onTap"),
        ("iron-resize", "_onResize"),
    ]


def test_properties_handler_adds_published_properties() -> None:
    element = ElementDescriptor()
    document = parse("x = {opened: {type: Boolean, reflectToAttribute: true}};")

    lookup_handler("properties")(element, find_first(document.root_node, "object"))

    assert len(element.properties) == 1
    opened = element.properties[0]
    assert opened.name == "opened"
    assert opened.published is True
    assert opened.type == "boolean"
    assert opened.reflect_to_attribute is True
