"""Tests for the enter/leave traversal driver."""

from __future__ import annotations

from typing import List, Tuple

from elementscan.javascript.esutil import node_text
from elementscan.javascript.traverse import Visitor, VisitorOption, traverse
from tests._fixtures.syntax import parse


class RecordingVisitor(Visitor):
    def __init__(self, skip: str | None = None) -> None:
        self.events: List[Tuple[str, str]] = []
        self._skip = skip

    def enter_call_expression(self, node, parent):
        self.events.append(("enter", node_text(node)))
        if node_text(node) == self._skip:
            return VisitorOption.SKIP
        return None

    def leave_call_expression(self, node, parent):
        self.events.append(("leave", node_text(node)))


def test_traverse_visits_depth_first() -> None:
    document = parse("outer(inner());")
    visitor = RecordingVisitor()

    traverse(document.root_node, visitor)

    assert visitor.events == [
        ("enter", "outer(inner())"),
        ("enter", "inner()"),
        ("leave", "inner()"),
        ("leave", "outer(inner())"),
    ]


def test_skip_prevents_descent_but_still_leaves() -> None:
    document = parse("outer(inner());")
    visitor = RecordingVisitor(skip="outer(inner())")

    traverse(document.root_node, visitor)

    assert visitor.events == [
        ("enter", "outer(inner())"),
        ("leave", "outer(inner())"),
    ]


def test_parent_is_passed_to_callbacks() -> None:
    parents = []

    class ParentVisitor(Visitor):
        def enter_call_expression(self, node, parent):
            parents.append(parent.type)

    traverse(parse("a();").root_node, ParentVisitor())

    assert parents == ["expression_statement"]
