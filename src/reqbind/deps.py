"""
reqbind.deps

FastAPI dependency wiring.

Responsibilities:
- Provide the default `Binder` as a dependency (overridable in tests/apps).
- Provide `bound(Model)`, a dependency factory that binds a request into a
  fresh model instance and reports failures as HTTP 422 validation errors.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel

from reqbind.binder import Binder, Flag, default_binder
from reqbind.errors import BodyDecodeError, FieldConversionError
from reqbind.observability.logging import get_logger
from reqbind.tags import SKIP, field_tags

M = TypeVar("M", bound=BaseModel)

log = get_logger(__name__)


def binder_dep() -> Binder:
    return default_binder()


def _missing_loc(name: str, model: type[BaseModel]) -> tuple[str, ...]:
    field = model.model_fields[name]
    for tag in field_tags(field.metadata):
        if tag.name != SKIP:
            return (tag.source.value, tag.name or name)
    return ("body", field.alias or name)


def bound(model: type[M], *flags: Flag) -> Callable[..., Awaitable[M]]:
    """
    Dependency factory:

        @router.get("/accounts/{account}/orders")
        async def list_orders(params: ListOrders = Depends(bound(ListOrders))): ...
    """

    async def _dep(request: Request, binder: Binder = Depends(binder_dep)) -> M:
        # Fields are validated one by one on assignment; required ones are checked last.
        dest = model.model_construct()
        try:
            await binder.request(request, dest, *flags)
        except FieldConversionError as e:
            log.info("bind.rejected", source=e.source, key=e.key, reason=e.reason)
            raise RequestValidationError(
                [
                    {
                        "type": "value_error",
                        "loc": (e.source, e.key),
                        "msg": e.reason,
                        "input": e.value,
                    }
                ]
            ) from e
        except BodyDecodeError as e:
            log.info("bind.rejected", content_type=e.content_type, reason=e.reason)
            raise RequestValidationError(
                [{"type": "value_error", "loc": ("body",), "msg": e.reason, "input": None}]
            ) from e

        errors: list[dict[str, Any]] = [
            {
                "type": "missing",
                "loc": _missing_loc(name, model),
                "msg": "Field required",
                "input": None,
            }
            for name, field in model.model_fields.items()
            if field.is_required() and name not in dest.__dict__
        ]
        if errors:
            log.info("bind.incomplete", missing=[err["loc"] for err in errors])
            raise RequestValidationError(errors)
        return dest

    return _dep


# --- Module Notes -----------------------------------------------------------
# Only top-level required fields are checked; nested models allocated during
# path binding may still hold unset required fields.
