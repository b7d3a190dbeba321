"""Element declaration discovery for Polymer-style component sources."""

from __future__ import annotations

from .declaration_property_handlers import HandledProperty, lookup_handler
from .element_finder import ElementVisitor, PolymerElementFinder, find_elements
from .property_classifier import PropertyClassifier

__all__ = [
    "ElementVisitor",
    "HandledProperty",
    "PolymerElementFinder",
    "PropertyClassifier",
    "find_elements",
    "lookup_handler",
]
