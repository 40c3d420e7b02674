"""
reqbind.tags

Field tags and binding plans.

Responsibilities:
- Define the `Annotated` markers that tie a model field to a request source.
- Walk a model class (recursing into untagged nested models) and compute the
  list of bindable fields per source; plans are cached per class.
- Provide the small typing helpers shared by the decoders.

Example:

    class ListOrders(BaseModel):
        account_id: Annotated[int, Path("account")]
        trace: Annotated[str | None, Header("X-Trace-Id")] = None
        page: Annotated[int, Query()] = 1
        tags: Annotated[list[str], Query("tag")] = []
"""

from __future__ import annotations

import collections.abc
import enum
import types
from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel

# Tag name that excludes a field from a source.
SKIP = "-"

_SEQUENCE_ORIGINS = frozenset(
    {
        list,
        tuple,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
    }
)


class Source(str, enum.Enum):
    path = "path"
    header = "header"
    query = "query"
    form = "form"


@dataclass(frozen=True, slots=True)
class Tag:
    source: Source
    name: str | None = None


def Path(name: str | None = None) -> Tag:
    return Tag(Source.path, name)


def Header(name: str | None = None) -> Tag:
    return Tag(Source.header, name)


def Query(name: str | None = None) -> Tag:
    return Tag(Source.query, name)


def Form(name: str | None = None) -> Tag:
    return Tag(Source.form, name)


@dataclass(frozen=True, slots=True)
class FieldBinding:
    """
    One bindable field, addressed from the root model.

    `owners` lists the (attribute, model class) hops from the root down to the
    model that declares the field; it is empty for top-level fields.
    """

    owners: tuple[tuple[str, type[BaseModel]], ...]
    name: str
    key: str
    annotation: Any
    optional: bool
    multi: bool

    @property
    def dotted(self) -> str:
        return ".".join([*(attr for attr, _ in self.owners), self.name])


def unwrap(annotation: Any) -> tuple[Any, bool]:
    """
    Strip `Annotated` and `Optional` wrappers.

    Returns the inner type and whether `None` was part of the annotation.
    Unions of several non-None types are returned unchanged.
    """

    optional = False
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation = get_args(annotation)[0]
            continue
        if origin is Union or origin is types.UnionType:
            args = get_args(annotation)
            rest = [a for a in args if a is not type(None)]
            if len(rest) == 1 and len(rest) < len(args):
                optional = True
                annotation = rest[0]
                continue
        return annotation, optional


def is_sequence(annotation: Any) -> bool:
    return (get_origin(annotation) or annotation) in _SEQUENCE_ORIGINS


def is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def field_tags(metadata: list[Any]) -> list[Tag]:
    return [m for m in metadata if isinstance(m, Tag)]


@lru_cache(maxsize=None)
def binding_plan(model: type[BaseModel], source: Source) -> tuple[FieldBinding, ...]:
    return tuple(_walk(model, source, (), frozenset({model})))


def _walk(
    model: type[BaseModel],
    source: Source,
    owners: tuple[tuple[str, type[BaseModel]], ...],
    seen: frozenset[type[BaseModel]],
) -> Iterator[FieldBinding]:
    for name, field in model.model_fields.items():
        tags = field_tags(field.metadata)
        inner, optional = unwrap(field.annotation)
        matching = [t for t in tags if t.source is source]
        if matching:
            # Last marker wins when a source is tagged twice.
            tag = matching[-1]
            if tag.name == SKIP:
                continue
            yield FieldBinding(
                owners=owners,
                name=name,
                key=tag.name or name,
                annotation=inner,
                optional=optional,
                multi=is_sequence(inner),
            )
        elif not tags and is_model(inner) and inner not in seen:
            # Untagged nested model: its tagged fields bind as if declared on the parent.
            yield from _walk(inner, source, (*owners, (name, inner)), seen | {inner})


@lru_cache(maxsize=None)
def document_fields(model: type[BaseModel]) -> dict[str, FieldBinding]:
    """
    Map JSON/XML document keys to top-level fields.

    Keys are the field's string validation alias or alias, and the field name.
    """

    fields: dict[str, FieldBinding] = {}
    for name, field in model.model_fields.items():
        inner, optional = unwrap(field.annotation)
        keys = [name]
        for alias in (field.validation_alias, field.alias):
            if isinstance(alias, str):
                keys.insert(0, alias)
        for key in keys:
            fields.setdefault(
                key,
                FieldBinding(
                    owners=(),
                    name=name,
                    key=key,
                    annotation=inner,
                    optional=optional,
                    multi=is_sequence(inner),
                ),
            )
    return fields


# --- Module Notes -----------------------------------------------------------
# Plans are keyed by class, so models created dynamically per request will grow
# the cache; declare destination models at module level.
