"""
reqbind.decoding

Decoding of request values into pydantic model instances.

Responsibilities:
- Validate the destination and assign single fields through pydantic's
  assignment validation (lax conversion, field constraints, aliases).
- Decode MultiValues into the fields tagged for a source.
- Decode JSON and XML documents into top-level fields.
"""

from __future__ import annotations

from typing import Any, get_args
from xml.etree import ElementTree

from pydantic import BaseModel, ValidationError
from pydantic_core import from_json

from reqbind.errors import BodyDecodeError, FieldConversionError, InvalidDestinationError
from reqbind.tags import FieldBinding, Source, binding_plan, document_fields
from reqbind.values import MultiValues, from_items


def check_destination(dest: Any) -> BaseModel:
    if isinstance(dest, type) or not isinstance(dest, BaseModel):
        raise InvalidDestinationError(dest)
    if dest.model_config.get("frozen"):
        raise InvalidDestinationError(dest, "model is frozen")
    return dest


def _reason(exc: ValidationError) -> str:
    return "; ".join(err["msg"] for err in exc.errors(include_url=False))


def _owner(dest: BaseModel, binding: FieldBinding) -> BaseModel:
    target = dest
    for attr, model in binding.owners:
        child = getattr(target, attr, None)
        if child is None:
            # Allocate missing nested models; fields without values stay unset.
            child = model.model_construct()
            target.__pydantic_validator__.validate_assignment(target, attr, child)
            child = getattr(target, attr)
        target = child
    return target


def assign(dest: BaseModel, binding: FieldBinding, value: Any, *, source: str) -> None:
    owner = _owner(dest, binding)
    if type(owner).model_fields[binding.name].frozen:
        raise InvalidDestinationError(dest, f"field {binding.dotted!r} is frozen")
    try:
        owner.__pydantic_validator__.validate_assignment(owner, binding.name, value)
    except ValidationError as e:
        raise FieldConversionError(
            source=source, key=binding.key, value=value, reason=_reason(e)
        ) from e


def _keeps_empty(binding: FieldBinding) -> bool:
    # Only string targets take "" as a value; elsewhere a blank input means "not sent".
    target = binding.annotation
    if binding.multi:
        args = get_args(target)
        target = args[0] if args else str
    return isinstance(target, type) and issubclass(target, str)


def select(binding: FieldBinding, values: list[Any]) -> Any:
    # Sequence fields take every value; scalar fields take the first.
    return list(values) if binding.multi else values[0]


def decode_values(
    dest: BaseModel,
    values: MultiValues,
    source: Source,
    *,
    fold_case: bool = False,
) -> None:
    """
    Assign every field tagged for `source` whose key is present in `values`.

    Empty strings are ignored for non-string fields, so `?page=` leaves
    `page` untouched.

    With `fold_case`, keys are compared case-insensitively (headers).
    """

    lookup = {k.lower(): v for k, v in values.items()} if fold_case else values
    for binding in binding_plan(type(dest), source):
        found = lookup.get(binding.key.lower() if fold_case else binding.key)
        if found and not _keeps_empty(binding):
            found = [v for v in found if v != ""]
        if not found:
            continue
        assign(dest, binding, select(binding, found), source=source.value)


def decode_json(dest: BaseModel, body: bytes, *, content_type: str) -> None:
    try:
        document = from_json(body)
    except ValueError as e:
        raise BodyDecodeError(content_type=content_type, reason=str(e)) from e
    if not isinstance(document, dict):
        raise BodyDecodeError(content_type=content_type, reason="expected a JSON object")

    fields = document_fields(type(dest))
    for key, value in document.items():
        binding = fields.get(key)
        if binding is None:
            continue
        assign(dest, binding, value, source="json")


def _local_name(tag: str) -> str:
    # "{namespace}name" -> "name"
    return tag.rsplit("}", 1)[-1]


def _element_value(element: ElementTree.Element) -> Any:
    if len(element) == 0:
        return element.text or ""
    grouped = from_items((_local_name(child.tag), _element_value(child)) for child in element)
    return {key: vals[0] if len(vals) == 1 else vals for key, vals in grouped.items()}


def xml_values(body: bytes) -> MultiValues:
    """
    Flatten the root element's children into MultiValues keyed by local tag name.

    Leaf elements contribute their text; elements with children contribute a
    nested mapping (repeated children become lists). Attributes are ignored.
    """

    root = ElementTree.fromstring(body)
    return from_items((_local_name(child.tag), _element_value(child)) for child in root)


def decode_xml(dest: BaseModel, body: bytes, *, content_type: str) -> None:
    try:
        values = xml_values(body)
    except ElementTree.ParseError as e:
        raise BodyDecodeError(content_type=content_type, reason=str(e)) from e

    fields = document_fields(type(dest))
    for key, vals in values.items():
        binding = fields.get(key)
        if binding is None:
            continue
        assign(dest, binding, select(binding, vals), source="xml")


# --- Module Notes -----------------------------------------------------------
# Assignment goes through `__pydantic_validator__.validate_assignment`, the same
# path pydantic uses for `validate_assignment=True` models, so it works whether
# or not the destination model enables that option.
