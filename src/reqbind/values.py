"""
reqbind.values

Multi-valued request maps and the vacuum cleaning pass.

Responsibilities:
- Convert Starlette multi-dicts (query params, headers, form data) into a
  plain `MultiValues` mapping.
- Provide `vacuum`, which trims strings and drops empty values and keys.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from starlette.datastructures import Headers

MultiValues = dict[str, list[Any]]


def from_items(items: Iterable[tuple[str, Any]]) -> MultiValues:
    """
    Group `(key, value)` pairs into a MultiValues map, preserving value order.
    """

    values: MultiValues = {}
    for key, value in items:
        values.setdefault(key, []).append(value)
    return values


def from_headers(headers: Headers) -> MultiValues:
    # Starlette keeps header names lowercased; lookups lowercase the tag name to match.
    return from_items(headers.items())


def merge(first: MultiValues, second: MultiValues) -> MultiValues:
    """
    Merge two maps; for shared keys the values of `first` come before those of `second`.
    """

    merged: MultiValues = {key: list(vals) for key, vals in first.items()}
    for key, vals in second.items():
        merged.setdefault(key, []).extend(vals)
    return merged


def vacuum(values: MultiValues) -> MultiValues:
    """
    Return a cleaned copy of `values`.

    Strings are trimmed and dropped when empty; keys left without values are
    removed. Non-string values (uploaded files) are kept as-is.
    """

    cleaned: MultiValues = {}
    for key, vals in values.items():
        kept: list[Any] = []
        for val in vals:
            if isinstance(val, str):
                val = val.strip()
                if not val:
                    continue
            kept.append(val)
        if kept:
            cleaned[key] = kept
    return cleaned


# --- Module Notes -----------------------------------------------------------
# The input map is never mutated; callers may keep using the raw values.
