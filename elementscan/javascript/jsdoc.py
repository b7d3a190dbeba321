"""Minimal JSDoc comment parsing."""

from __future__ import annotations

import re
from typing import List, Optional

from ..models import Annotation, Tag

_LEADING_ASTERISKS = re.compile(r"^[ \t]*\*+ ?", re.MULTILINE)
_TAG_LINE = re.compile(r"^@(\w+)\s*(.*)$")
_TYPE_PREFIX = re.compile(r"^\{([^}]*)\}\s*(.*)$", re.DOTALL)

# Tags whose first word after the optional {type} is a name.
_NAMED_TAGS = {"param", "event", "fires", "property", "demo", "default"}


def strip_comment_delimiters(text: str) -> str:
    """Return the body of a block or line comment."""
    if text.startswith("/*"):
        text = text[2:]
        if text.endswith("*/"):
            text = text[:-2]
    elif text.startswith("//"):
        text = text[2:]
    return text


def remove_leading_asterisks(text: str) -> str:
    return _LEADING_ASTERISKS.sub("", text)


def clean_comment(text: str) -> str:
    """Turn raw ``/** ... */`` source text into plain comment text."""
    return remove_leading_asterisks(strip_comment_delimiters(text)).strip()


def is_jsdoc(text: str) -> bool:
    return text.startswith("/**") and not text.startswith("/***")


def parse_jsdoc(text: str) -> Annotation:
    """Split cleaned comment text into a description and its tags."""
    description: List[str] = []
    tags: List[Tag] = []
    current: Optional[List[str]] = None
    current_title = ""

    def _flush() -> None:
        if current is not None:
            tags.append(_parse_tag(current_title, "\n".join(current).strip()))

    for line in text.splitlines():
        match = _TAG_LINE.match(line.strip())
        if match:
            _flush()
            current_title = match.group(1)
            current = [match.group(2)]
        elif current is not None:
            current.append(line.strip())
        else:
            description.append(line)
    _flush()
    return Annotation(description="\n".join(description).strip(), tags=tags)


def _parse_tag(title: str, body: str) -> Tag:
    tag = Tag(title=title)
    match = _TYPE_PREFIX.match(body)
    if match:
        tag.type = match.group(1).strip()
        body = match.group(2)
    if title in _NAMED_TAGS and body:
        parts = body.split(None, 1)
        tag.name = parts[0]
        body = parts[1] if len(parts) > 1 else ""
    body = body.strip()
    tag.description = body or None
    return tag


__all__ = [
    "clean_comment",
    "is_jsdoc",
    "parse_jsdoc",
    "remove_leading_asterisks",
    "strip_comment_delimiters",
]
