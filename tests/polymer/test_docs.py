"""Tests for JSDoc annotation of descriptors."""

from __future__ import annotations

from elementscan.models import ElementDescriptor, PropertyDescriptor
from elementscan.polymer import docs


def test_annotate_element_collects_demos() -> None:
    element = ElementDescriptor(
        description="Shows a card.\n@demo demo/index.html Basic usage\n@demo demo/dark.html"
    )

    docs.annotate_element(element)

    assert element.description == "Shows a card."
    assert element.demos == ["demo/index.html", "demo/dark.html"]


def test_annotate_property_applies_tags() -> None:
    prop = PropertyDescriptor(name="mode", description="Render mode.\n@private\n@default 'auto'")

    docs.annotate_property(prop)

    assert prop.description == "Render mode."
    assert prop.private is True
    assert prop.default == "'auto'"


def test_annotate_is_idempotent() -> None:
    prop = PropertyDescriptor(name="size", description="Size.\n@type {number}")

    docs.annotate_property(prop)
    docs.annotate_property(prop)

    assert prop.type == "number"
    assert prop.jsdoc is not None
    assert prop.jsdoc.has_tag("type")
