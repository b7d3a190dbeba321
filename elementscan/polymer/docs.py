"""Attach JSDoc-derived metadata to elements and their properties."""

from __future__ import annotations

from typing import TypeVar, Union

from ..javascript import jsdoc
from ..models import ElementDescriptor, PropertyDescriptor

Feature = TypeVar("Feature", bound=Union[ElementDescriptor, PropertyDescriptor])


def annotate(feature: Feature) -> Feature:
    """Parse ``feature.description`` into ``feature.jsdoc``; idempotent."""
    if feature.jsdoc is not None:
        return feature
    annotation = jsdoc.parse_jsdoc(feature.description or "")
    feature.jsdoc = annotation
    feature.description = annotation.description
    return feature


def annotate_property(prop: PropertyDescriptor) -> PropertyDescriptor:
    annotate(prop)
    annotation = prop.jsdoc
    if annotation is None:
        return prop
    type_tag = annotation.get_tag("type")
    if type_tag is not None and type_tag.type:
        prop.type = type_tag.type
    if annotation.has_tag("private") or annotation.has_tag("protected"):
        prop.private = True
    default_tag = annotation.get_tag("default")
    if default_tag is not None:
        prop.default = " ".join(part for part in (default_tag.name, default_tag.description) if part)
    return prop


def annotate_element(element: ElementDescriptor) -> ElementDescriptor:
    annotate(element)
    if element.jsdoc is not None:
        element.demos = [tag.name for tag in element.jsdoc.get_tags("demo") if tag.name]
    return element


__all__ = ["annotate", "annotate_element", "annotate_property"]
