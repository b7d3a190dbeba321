"""Core data models shared across elementscan components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class FileMeta:
    """Metadata for an individual source file."""

    path: str
    size: int
    language: Optional[str]
    role: str
    hash: str


@dataclass
class RepoManifest:
    """Normalized view of the source tree for analyzers."""

    root: str
    files: List[FileMeta]


@dataclass
class Signal:
    """Structured fact emitted by analyzers for downstream use."""

    name: str
    value: str
    source: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Position:
    """Zero-based line/column pair."""

    line: int
    column: int


@dataclass(frozen=True)
class SourceRange:
    file: str
    start: Position
    end: Position

    def __str__(self) -> str:
        return f"{self.file}:{self.start.line + 1}:{self.start.column + 1}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "start": {"line": self.start.line, "column": self.start.column},
            "end": {"line": self.end.line, "column": self.end.column},
        }


@dataclass
class Tag:
    """A single `@tag` parsed out of a JSDoc comment."""

    title: str
    type: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass
class Annotation:
    """Parsed JSDoc comment: free text plus its tags."""

    description: str = ""
    tags: List[Tag] = field(default_factory=list)

    def get_tag(self, title: str) -> Optional[Tag]:
        for tag in self.tags:
            if tag.title == title:
                return tag
        return None

    def get_tags(self, title: str) -> List[Tag]:
        return [tag for tag in self.tags if tag.title == title]

    def has_tag(self, title: str) -> bool:
        return self.get_tag(title) is not None


@dataclass
class EventDescriptor:
    name: str
    description: str = ""
    params: List[Dict[str, Optional[str]]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "params": list(self.params)}


@dataclass
class Observer:
    """One entry of an element's complex observer list."""

    node: Any = field(repr=False, compare=False)
    expression: str = ""


@dataclass
class Listener:
    event: str
    handler: str


@dataclass
class PropertyDescriptor:
    """A property, method or accessor found on an element."""

    name: str
    type: Optional[str] = None
    description: str = ""
    getter: bool = False
    setter: bool = False
    function: bool = False
    params: List[str] = field(default_factory=list)
    private: bool = False
    published: bool = False
    notify: bool = False
    observer: Optional[str] = None
    read_only: bool = False
    reflect_to_attribute: bool = False
    computed: Optional[str] = None
    default: Optional[str] = None
    source_range: Optional[SourceRange] = None
    jsdoc: Optional[Annotation] = field(default=None, repr=False)
    node: Any = field(default=None, repr=False, compare=False)

    def merge(self, other: "PropertyDescriptor") -> None:
        """Fold a later record for the same name into this one."""
        self.getter = self.getter or other.getter
        self.setter = self.setter or other.setter
        self.published = self.published or other.published
        if not self.type and other.type:
            self.type = other.type
        if not self.description and other.description:
            self.description = other.description
        if self.default is None and other.default is not None:
            self.default = other.default

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "getter": self.getter,
            "setter": self.setter,
            "function": self.function,
            "private": self.private,
            "published": self.published,
        }
        if self.function:
            payload["params"] = list(self.params)
        if self.published:
            payload.update(
                {
                    "notify": self.notify,
                    "observer": self.observer,
                    "readOnly": self.read_only,
                    "reflectToAttribute": self.reflect_to_attribute,
                    "computed": self.computed,
                }
            )
        if self.default is not None:
            payload["default"] = self.default
        if self.source_range is not None:
            payload["sourceRange"] = self.source_range.to_dict()
        return payload


@dataclass
class ElementDescriptor:
    """A discovered component declaration."""

    description: str = ""
    source_range: Optional[SourceRange] = None
    events: List[EventDescriptor] = field(default_factory=list)
    properties: List[PropertyDescriptor] = field(default_factory=list)
    behaviors: List[str] = field(default_factory=list)
    observers: List[Observer] = field(default_factory=list)
    listeners: List[Listener] = field(default_factory=list)
    tag_name: Optional[str] = None
    class_name: Optional[str] = None
    demos: List[str] = field(default_factory=list)
    jsdoc: Optional[Annotation] = field(default=None, repr=False)

    def add_property(self, prop: PropertyDescriptor) -> PropertyDescriptor:
        """Add `prop`, merging into an existing entry with the same name."""
        if prop.name.startswith("_") or prop.name.endswith("_"):
            prop.private = True
        existing = self.get_property(prop.name)
        if existing is not None:
            existing.merge(prop)
            return existing
        self.properties.append(prop)
        return prop

    def absorb(self, other: "ElementDescriptor") -> None:
        """Fold what a declaration body collected into `other` into this element."""
        if other.tag_name is not None:
            self.tag_name = other.tag_name
        for prop in other.properties:
            self.add_property(prop)
        self.behaviors.extend(other.behaviors)
        self.observers.extend(other.observers)
        self.listeners.extend(other.listeners)

    def get_property(self, name: str) -> Optional[PropertyDescriptor]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tagName": self.tag_name,
            "className": self.class_name,
            "description": self.description,
            "sourceRange": self.source_range.to_dict() if self.source_range else None,
            "events": [event.to_dict() for event in self.events],
            "properties": [prop.to_dict() for prop in self.properties],
            "behaviors": list(self.behaviors),
            "observers": [observer.expression for observer in self.observers],
            "listeners": [
                {"event": listener.event, "handler": listener.handler}
                for listener in self.listeners
            ],
            "demos": list(self.demos),
        }
