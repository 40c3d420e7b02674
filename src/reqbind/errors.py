"""
reqbind.errors

Exception hierarchy raised by binding operations.

Responsibilities:
- Distinguish caller mistakes (bad destination, unsupported field types)
  from bad request data (conversion and body decoding failures).
- Keep the underlying pydantic/parser error attached as `__cause__`.
"""

from __future__ import annotations

from typing import Any


class BindError(Exception):
    pass


class InvalidDestinationError(BindError, TypeError):
    def __init__(self, dest: Any, reason: str = "expected a pydantic model instance") -> None:
        self.dest_type = type(dest)
        super().__init__(f"invalid bind destination {self.dest_type.__name__!r}: {reason}")


class UnsupportedFieldTypeError(BindError, TypeError):
    def __init__(self, field: str, annotation: Any) -> None:
        self.field = field
        self.annotation = annotation
        super().__init__(f"field {field!r}: unsupported type {annotation!r}")


class FieldConversionError(BindError, ValueError):
    """
    A request value could not be converted into the destination field.

    `source` is one of "path", "header", "query", "form", "json" or "xml";
    `key` is the name the value was looked up by in that source.
    """

    def __init__(self, *, source: str, key: str, value: Any, reason: str) -> None:
        self.source = source
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"{source} value {key!r}: {reason}")


class BodyDecodeError(BindError, ValueError):
    def __init__(self, *, content_type: str, reason: str) -> None:
        self.content_type = content_type
        self.reason = reason
        super().__init__(f"cannot decode {content_type!r} body: {reason}")


# --- Module Notes -----------------------------------------------------------
# `reqbind.deps` maps FieldConversionError/BodyDecodeError to HTTP 422 responses;
# the TypeError subclasses are programming errors and propagate unchanged.
