"""Discovery of element declarations in a JavaScript document.

Two declaration idioms are recognised:

* a class declaration, whose ``this.<name> = ...`` assignments and method
  definitions describe the element;
* a call to the declaration factory (``Polymer({...})`` by default) with a
  single object literal argument describing the element.

:class:`ElementVisitor` is driven by :func:`elementscan.javascript.traverse.traverse`
and keeps at most one element under construction. :class:`PolymerElementFinder`
runs it over a document and returns the completed elements in the order their
declarations closed.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Tuple, Union

from tree_sitter import Node

from ..config import DEFAULT_FACTORY_NAME
from ..errors import UnresolvableKeyError
from ..javascript import ast_value, esutil
from ..javascript.parser import JavaScriptDocument, parse_javascript
from ..javascript.traverse import Visitor, VisitorOption
from ..logging import get_logger
from ..models import ElementDescriptor, Observer
from . import docs
from .declaration_property_handlers import HandledProperty, lookup_handler
from .property_classifier import PropertyClassifier

logger = get_logger("polymer.finder")


class DeclarationIdiom(Enum):
    CLASS = "class"
    FACTORY = "factory"


@dataclass(frozen=True)
class _Idle:
    pass


@dataclass(frozen=True)
class _Building:
    element: ElementDescriptor
    idiom: DeclarationIdiom
    node: Node


_IDLE = _Idle()


class ElementVisitor(Visitor):
    """Builds :class:`ElementDescriptor` objects from traversal events.

    One visitor serves exactly one traversal; it holds all of the traversal's
    mutable state and must not be shared between documents.
    """

    def __init__(self, url: str = "", factory_name: str = DEFAULT_FACTORY_NAME) -> None:
        self.entities: List[ElementDescriptor] = []
        self._url = url
        self._factory_name = factory_name
        self._state: Union[_Idle, _Building] = _IDLE
        self._class_detected = False

    @property
    def element(self) -> Optional[ElementDescriptor]:
        """The element under construction, if any."""
        if isinstance(self._state, _Building):
            return self._state.element
        return None

    def _open(self, element: ElementDescriptor, idiom: DeclarationIdiom, node: Node) -> None:
        self._state = _Building(element=element, idiom=idiom, node=node)
        logger.debug("Opened %s declaration at %s", idiom.value, element.source_range)

    def _finish(self, state: _Building) -> None:
        self.entities.append(state.element)
        self._state = _IDLE
        logger.debug(
            "Closed %s declaration %s",
            state.idiom.value,
            state.element.tag_name or state.element.class_name or "<anonymous>",
        )

    # Class idiom

    def enter_class_declaration(self, node: Node, parent: Optional[Node]) -> None:
        state = self._state
        if isinstance(state, _Building):
            # Inside a factory call's arguments a class is plain code and
            # leaves class mode alone.
            if state.idiom is DeclarationIdiom.CLASS:
                self._class_detected = True
            return
        self._class_detected = True
        name = node.child_by_field_name("name")
        element = ElementDescriptor(
            description=esutil.get_attached_comment(node) or "",
            events=esutil.get_event_comments(node),
            source_range=esutil.get_source_range(node, self._url),
            class_name=esutil.node_text(name) if name is not None else None,
        )
        self._open(element, DeclarationIdiom.CLASS, node)

    def leave_class_declaration(self, node: Node, parent: Optional[Node]) -> None:
        # Closes whatever class element is open, not necessarily the one this
        # class opened: a class declared inside another class body ends the
        # outer element early.
        state = self._state
        if isinstance(state, _Building):
            if state.idiom is DeclarationIdiom.FACTORY:
                return
            for prop in state.element.properties:
                docs.annotate_property(prop)
            docs.annotate_element(state.element)
            self._finish(state)
        self._class_detected = False

    def enter_assignment_expression(self, node: Node, parent: Optional[Node]) -> None:
        state = self._state
        if not isinstance(state, _Building):
            return
        left = node.child_by_field_name("left")
        if left is None or left.type != "member_expression":
            return
        target = left.child_by_field_name("object")
        prop = left.child_by_field_name("property")
        if target is None or target.type != "this" or prop is None:
            return
        handler = lookup_handler(esutil.node_text(prop))
        right = node.child_by_field_name("right")
        if handler is not None and right is not None:
            handler(state.element, right)

    def enter_method_definition(self, node: Node, parent: Optional[Node]) -> None:
        state = self._state
        if not isinstance(state, _Building):
            return
        prop = docs.annotate_property(esutil.to_property_descriptor(node, self._url))
        synthetic = prop.getter and prop.name in (HandledProperty.BEHAVIORS, HandledProperty.OBSERVERS)
        if not synthetic:
            state.element.add_property(prop)
            return

        array = _returned_array(node)
        if array is None:
            logger.debug("Accessor %s does not return an array literal; ignoring", prop.name)
            return
        if prop.name == HandledProperty.BEHAVIORS:
            for item in esutil.named_children(array):
                name = ast_value.get_identifier_name(item)
                if name is not None:
                    state.element.behaviors.append(name)
        else:
            for item in esutil.named_children(array):
                state.element.observers.append(Observer(node=item, expression=esutil.node_text(item)))

    # Factory idiom

    def _is_factory_call(self, node: Node) -> bool:
        callee = node.child_by_field_name("function")
        return (
            callee is not None
            and callee.type == "identifier"
            and esutil.node_text(callee) == self._factory_name
        )

    def enter_call_expression(self, node: Node, parent: Optional[Node]) -> Optional[VisitorOption]:
        if not self._is_factory_call(node):
            return None
        # A factory call inside a class body is not a declaration of its own.
        if self._class_detected:
            return VisitorOption.SKIP
        state = self._state
        if isinstance(state, _Building):
            # Only reachable for a factory call nested in another call's
            # arguments; the outer call cannot be a valid declaration.
            logger.debug(
                "Replacing unfinished declaration at %s with nested %s() call",
                state.element.source_range,
                self._factory_name,
            )
        args = _call_arguments(node)
        host = parent if parent is not None else node
        element = ElementDescriptor(
            description=esutil.get_attached_comment(node) or "",
            events=esutil.get_event_comments(host),
            source_range=esutil.get_source_range(args[0] if args else None, self._url),
        )
        docs.annotate_element(element)
        element.description = element.description.strip()
        self._open(element, DeclarationIdiom.FACTORY, node)
        return None

    def leave_call_expression(self, node: Node, parent: Optional[Node]) -> None:
        if not self._is_factory_call(node):
            return
        state = self._state
        if not isinstance(state, _Building) or state.node != node:
            return
        args = _call_arguments(node)
        if len(args) == 1 and args[0].type == "object":
            for prop in state.element.properties:
                docs.annotate_property(prop)
            self._finish(state)
        else:
            logger.debug(
                "Discarding %s() call at %s without a single object literal argument",
                self._factory_name,
                esutil.get_source_range(node, self._url),
            )
            self._state = _IDLE

    def enter_object(self, node: Node, parent: Optional[Node]) -> Optional[VisitorOption]:
        # Object literals inside a class body never describe the element.
        if self._class_detected:
            return VisitorOption.SKIP
        state = self._state
        if not isinstance(state, _Building):
            return None
        self._collect_body(state.element, node)
        # Nested literals (default values, listener maps) are not declaration bodies.
        return VisitorOption.SKIP

    def _collect_body(self, element: ElementDescriptor, node: Node) -> None:
        entries: List[Tuple[str, Node]] = []
        for entry in esutil.named_children(node):
            name = esutil.object_key_to_string(esutil.property_key(entry))
            if name is None:
                raise UnresolvableKeyError(
                    "Can't determine name for property key.",
                    esutil.get_source_range(entry, self._url),
                )
            entries.append((name, entry))

        # Handlers can still raise (a nested ``properties`` block), so the body
        # is staged and only folded into the element once it is complete.
        staged = ElementDescriptor(source_range=element.source_range)
        classifier = PropertyClassifier()
        for name, entry in entries:
            handler = lookup_handler(name)
            value = esutil.entry_value(entry)
            if handler is not None and value is not None:
                handler(staged, value)
                continue
            record = classifier.add(esutil.to_property_descriptor(entry, self._url, name))
            if record is not None:
                staged.add_property(record)
        for record in classifier.merge():
            staged.add_property(record)
        element.absorb(staged)


def _call_arguments(node: Node) -> List[Node]:
    args = node.child_by_field_name("arguments")
    if args is None or args.type != "arguments":
        return []
    return esutil.named_children(args)


def _returned_array(method: Node) -> Optional[Node]:
    body = method.child_by_field_name("body")
    if body is None:
        return None
    statements = esutil.named_children(body)
    if not statements or statements[0].type != "return_statement":
        return None
    returned = esutil.named_children(statements[0])
    if not returned or returned[0].type != "array":
        return None
    return returned[0]


class PolymerElementFinder:
    """Finds every element declared in a document."""

    def __init__(self, factory_name: str = DEFAULT_FACTORY_NAME) -> None:
        self.factory_name = factory_name

    async def find_entities(
        self,
        document: JavaScriptDocument,
        visit: Callable[[Visitor], Awaitable[None]],
    ) -> List[ElementDescriptor]:
        visitor = ElementVisitor(url=document.url, factory_name=self.factory_name)
        await visit(visitor)
        if visitor.element is not None:
            logger.debug("Declaration left open at end of %s was dropped", document.url or "<input>")
        return visitor.entities

    async def find_in_document(self, document: JavaScriptDocument) -> List[ElementDescriptor]:
        return await self.find_entities(document, lambda visitor: document.visit([visitor]))


def find_elements(
    contents: str, url: str = "", factory_name: str = DEFAULT_FACTORY_NAME
) -> List[ElementDescriptor]:
    """Parse ``contents`` and return its elements.

    Runs its own event loop, so it must not be called from a coroutine; use
    :meth:`PolymerElementFinder.find_in_document` there instead.
    """
    document = parse_javascript(contents, url)
    return asyncio.run(PolymerElementFinder(factory_name).find_in_document(document))


__all__ = [
    "DeclarationIdiom",
    "ElementVisitor",
    "PolymerElementFinder",
    "find_elements",
]
