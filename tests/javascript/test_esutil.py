"""Tests for syntax node helpers."""

from __future__ import annotations

import pytest

from elementscan.errors import UnresolvableKeyError
from elementscan.javascript import esutil
from tests._fixtures.syntax import find_all, find_first, parse


def _entries(source: str):
    document = parse(source)
    return esutil.named_children(find_first(document.root_node, "object"))


def test_object_key_to_string_resolves_static_keys() -> None:
    entries = _entries("x = {plain: 1, 'quoted': 2, 3: 3, ['lit']: 4, [dyn]: 5, short};")

    names = [esutil.object_key_to_string(esutil.property_key(entry)) for entry in entries]

    assert names == ["plain", "quoted", "3", "lit", None, "short"]


def test_spread_entries_have_no_key() -> None:
    entries = _entries("x = {...base};")
    assert esutil.property_key(entries[0]) is None


def test_accessor_kind_reads_get_and_set_tokens() -> None:
    document = parse(
        """
        class A {
          static get one() { return 1; }
          set two(v) {}
          plain() {}
        }
        """
    )
    methods = find_all(document.root_node, "method_definition")

    assert [esutil.accessor_kind(method) for method in methods] == ["get", "set", None]


def test_closure_type_inference() -> None:
    entries = _entries(
        "x = {a: 'str', b: 1, c: true, d: null, e: [], f: {}, g: () => 1, h: undefined, i: other, j: new Map()};"
    )

    types = [esutil.closure_type(esutil.entry_value(entry)) for entry in entries]

    assert types == [
        "string",
        "number",
        "boolean",
        "null",
        "Array",
        "Object",
        "Function",
        "undefined",
        "?",
        "Map",
    ]


def test_to_property_descriptor_reads_methods() -> None:
    entries = _entries("x = {handle(event, detail = {}) {}, get size() { return 1; }};")

    handle = esutil.to_property_descriptor(entries[0], "file.js")
    size = esutil.to_property_descriptor(entries[1], "file.js")

    assert handle.function is True
    assert handle.params == ["event", "detail"]
    assert handle.source_range is not None and handle.source_range.file == "file.js"
    assert size.getter is True
    assert size.type is None
    assert size.function is False


def test_to_property_descriptor_raises_for_dynamic_keys() -> None:
    entries = _entries("x = {[dyn]: 1};")

    with pytest.raises(UnresolvableKeyError) as excinfo:
        esutil.to_property_descriptor(entries[0], "file.js")

    assert excinfo.value.location is not None
    assert str(excinfo.value).startswith("file.js:1:")


def test_attached_comment_uses_last_jsdoc_block() -> None:
    document = parse(
        """
        /** Old docs. */
        // unrelated
        /**
         * Current docs.
         */
        export class Documented {}
        """
    )

    node = find_first(document.root_node, "class_declaration")

    assert esutil.get_attached_comment(node) == "Current docs."


def test_attached_comment_ignores_plain_comments() -> None:
    document = parse(
        """
        /* not jsdoc */
        class Plain {}
        """
    )

    assert esutil.get_attached_comment(find_first(document.root_node, "class_declaration")) is None


def test_event_comments_are_sorted_and_deduplicated() -> None:
    document = parse(
        """
        class Noisy {
          /** @event zeta Last one. */
          a() {}
          /** @event alpha First one. */
          b() {}
          /** Not an event. */
          c() {}
        }
        """
    )

    events = esutil.get_event_comments(find_first(document.root_node, "class_declaration"))

    assert [(event.name, event.description) for event in events] == [
        ("alpha", "First one."),
        ("zeta", "Last one."),
    ]
