"""Tree-sitter backed JavaScript parsing."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Iterable, Optional

import tree_sitter_javascript as ts_js
from tree_sitter import Language, Node, Parser, Tree

from ..logging import get_logger
from .traverse import Visitor, traverse

_LANGUAGE: Optional[Language] = None
_PARSER: Optional[Parser] = None

logger = get_logger("javascript.parser")


@dataclass
class JavaScriptDocument:
    """A parsed JavaScript source unit."""

    url: str
    contents: str
    tree: Tree

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    @property
    def has_errors(self) -> bool:
        return self.tree.root_node.has_error

    async def visit(self, visitors: Iterable[Visitor]) -> None:
        """Run a full traversal of the document for each visitor.

        Each traversal runs in a worker thread so that documents visited under
        one ``asyncio.gather`` are walked side by side instead of in turn.
        The tree is only read, never edited, while visitors run.
        """
        for visitor in visitors:
            await asyncio.to_thread(traverse, self.root_node, visitor)


def _get_parser() -> Parser:
    global _LANGUAGE, _PARSER
    if _PARSER is not None:
        return _PARSER
    _LANGUAGE = Language(ts_js.language())
    _PARSER = Parser(_LANGUAGE)
    return _PARSER


def parse_javascript(contents: str, url: str = "") -> JavaScriptDocument:
    """Parse ``contents`` into a :class:`JavaScriptDocument`."""
    tree = _get_parser().parse(contents.encode("utf-8"))
    if tree.root_node.has_error:
        logger.warning("Syntax errors while parsing %s; results may be incomplete", url or "<input>")
    return JavaScriptDocument(url=url, contents=contents, tree=tree)


__all__ = ["JavaScriptDocument", "parse_javascript"]
