"""
tests.test_values

Unit tests for MultiValues helpers and the vacuum pass.
"""

from __future__ import annotations

from reqbind.values import from_items, merge, vacuum


def test_vacuum_trims_and_drops_empty_values() -> None:
    values = {
        "name": ["  Ann  "],
        "tags": ["a", " ", "", " b"],
        "blank": ["", "   "],
        "none": [],
    }

    assert vacuum(values) == {"name": ["Ann"], "tags": ["a", "b"]}


def test_vacuum_keeps_non_string_values_and_input_intact() -> None:
    marker = object()
    values = {"file": [marker, " "], "q": [" x "]}

    cleaned = vacuum(values)

    assert cleaned == {"file": [marker], "q": ["x"]}
    assert values == {"file": [marker, " "], "q": [" x "]}


def test_from_items_groups_in_order() -> None:
    assert from_items([("a", "1"), ("b", "2"), ("a", "3")]) == {"a": ["1", "3"], "b": ["2"]}


def test_merge_puts_first_map_values_first() -> None:
    merged = merge({"a": ["form"]}, {"a": ["query"], "b": ["q"]})

    assert merged == {"a": ["form", "query"], "b": ["q"]}
