"""
reqbind.scalars

Type-directed conversion of a single path-variable string.

Responsibilities:
- Parse a string into bool/int/float/str (or subclasses) with strict
  decimal syntax: no surrounding blanks, no underscores, no base prefixes
  or hex floats. Integers are unbounded; use field constraints for ranges.
- Map the empty string to the zero value of the target type.
"""

from __future__ import annotations

import re
from typing import Any, get_origin

from reqbind.errors import UnsupportedFieldTypeError

_INT = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"invalid boolean {text!r}")


def parse_int(text: str) -> int:
    if not _INT.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    return int(text)


def parse_float(text: str) -> float:
    if not _FLOAT.fullmatch(text):
        raise ValueError(f"invalid float {text!r}")
    return float(text)


def convert_scalar(field: str, annotation: Any, text: str, *, optional: bool = False) -> Any:
    """
    Convert `text` for a field annotated with `annotation` (already unwrapped).

    Raises UnsupportedFieldTypeError for non-scalar types and ValueError for
    unparsable text.
    """

    if get_origin(annotation) is not None or not isinstance(annotation, type):
        raise UnsupportedFieldTypeError(field, annotation)
    if text == "" and optional:
        return None

    # bool before int: bool is an int subclass.
    if issubclass(annotation, bool):
        return parse_bool(text) if text else False
    if issubclass(annotation, int):
        return parse_int(text) if text else 0
    if issubclass(annotation, float):
        return parse_float(text) if text else 0.0
    if issubclass(annotation, str):
        return text
    raise UnsupportedFieldTypeError(field, annotation)


# --- Module Notes -----------------------------------------------------------
# Only path variables go through here; header/query/form/body values are
# converted by pydantic's lax mode.
