"""Depth-first enter/leave traversal over tree-sitter syntax trees."""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional, Tuple

from tree_sitter import Node


class VisitorOption(Enum):
    """Control values a visitor callback may return to the driver."""

    SKIP = "skip"


class Visitor:
    """Base class for traversal visitors.

    The driver calls ``enter_<node type>(node, parent)`` before a node's
    children and ``leave_<node type>(node, parent)`` after them. Returning
    :attr:`VisitorOption.SKIP` from an enter callback prevents the driver from
    descending into that node; its leave callback still runs.
    """


def traverse(root: Node, visitor: Visitor) -> None:
    """Walk ``root`` depth-first, dispatching callbacks on ``visitor``."""
    stack: List[Tuple[Node, Optional[Node], bool]] = [(root, None, False)]
    while stack:
        node, parent, leaving = stack.pop()
        if leaving:
            _dispatch(visitor, "leave", node, parent)
            continue
        result = _dispatch(visitor, "enter", node, parent)
        stack.append((node, parent, True))
        if result is VisitorOption.SKIP:
            continue
        for child in reversed(node.named_children):
            stack.append((child, node, False))


def _dispatch(
    visitor: Visitor, phase: str, node: Node, parent: Optional[Node]
) -> Optional[VisitorOption]:
    callback: Optional[Callable[[Node, Optional[Node]], Optional[VisitorOption]]]
    callback = getattr(visitor, f"{phase}_{node.type}", None)
    if callback is None:
        return None
    return callback(node, parent)


__all__ = ["Visitor", "VisitorOption", "traverse"]
