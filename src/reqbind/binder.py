"""
reqbind.binder

Request binding entrypoints.

Responsibilities:
- Hold the binding configuration (path-variable accessor, settings) in a
  `Binder` object instead of process-wide globals.
- Dispatch on HTTP method and content type to pick a decoding strategy.
- Expose module-level `bind_*` helpers backed by a default binder.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from functools import lru_cache
from typing import Any

from starlette.requests import Request

from reqbind.decoding import assign, check_destination, decode_json, decode_values, decode_xml
from reqbind.errors import FieldConversionError
from reqbind.observability.logging import get_logger
from reqbind.scalars import convert_scalar
from reqbind.settings import BindSettings, get_settings
from reqbind.tags import Source, binding_plan
from reqbind.values import from_headers, from_items, merge, vacuum

log = get_logger(__name__)

PathValueFunc = Callable[[Request, str], str | None]

_JSON_TYPES = ("application/json",)
_XML_TYPES = ("application/xml", "text/xml")
_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class Flag(enum.Enum):
    # Clean values before binding: trim strings, drop empty values and keys.
    VACUUM = "vacuum"


VACUUM = Flag.VACUUM


def path_params_value(request: Request, name: str) -> str | None:
    # Default accessor: values captured by the Starlette/FastAPI router.
    value = request.path_params.get(name)
    return None if value is None else str(value)


class Binder:
    """
    Binds request data into pydantic model instances.

    `path_value` retrieves path variables from the caller's routing layer;
    pass `None` to disable path binding.
    """

    def __init__(
        self,
        *,
        path_value: PathValueFunc | None = path_params_value,
        settings: BindSettings | None = None,
    ) -> None:
        self._path_value = path_value
        self._settings = settings or get_settings()

    def _vacuum(self, flags: tuple[Flag, ...]) -> bool:
        return self._settings.vacuum or Flag.VACUUM in flags

    async def request(self, request: Request, dest: Any, *flags: Flag) -> None:
        """
        Bind path and headers, then the query string for read-only methods
        or the body for everything else.
        """

        self.path(request, dest, *flags)
        self.header(request, dest, *flags)
        if request.method.upper() in self._settings.query_methods:
            self.query(request, dest, *flags)
            return
        await self.body(request, dest, *flags)

    def path(self, request: Request, dest: Any, *flags: Flag) -> None:
        if self._path_value is None:
            return
        model = check_destination(dest)
        clean = self._vacuum(flags)

        for binding in binding_plan(type(model), Source.path):
            text = self._path_value(request, binding.key) or ""
            if clean:
                text = text.strip()
            try:
                value = convert_scalar(
                    binding.dotted, binding.annotation, text, optional=binding.optional
                )
            except ValueError as e:
                raise FieldConversionError(
                    source=Source.path.value, key=binding.key, value=text, reason=str(e)
                ) from e
            assign(model, binding, value, source=Source.path.value)

    def header(self, request: Request, dest: Any, *flags: Flag) -> None:
        model = check_destination(dest)
        values = from_headers(request.headers)
        if self._vacuum(flags):
            values = vacuum(values)
        decode_values(model, values, Source.header, fold_case=True)

    def query(self, request: Request, dest: Any, *flags: Flag) -> None:
        model = check_destination(dest)
        values = from_items(request.query_params.multi_items())
        if self._vacuum(flags):
            values = vacuum(values)
        decode_values(model, values, Source.query)

    async def body(self, request: Request, dest: Any, *flags: Flag) -> None:
        model = check_destination(dest)
        if request.headers.get("content-length") == "0":
            return

        content_type = request.headers.get("content-type", "")
        if content_type.startswith(_FORM_TYPES):
            await self._form(request, model, flags)
            return
        if not content_type.startswith(_JSON_TYPES + _XML_TYPES):
            log.debug("bind.body.skipped", content_type=content_type)
            return

        body = await request.body()
        if not body:
            return
        if content_type.startswith(_JSON_TYPES):
            decode_json(model, body, content_type=content_type)
        else:
            decode_xml(model, body, content_type=content_type)

    async def _form(self, request: Request, model: Any, flags: tuple[Flag, ...]) -> None:
        form = await request.form()
        # Form values first, then query values, like a merged request form.
        values = merge(
            from_items(form.multi_items()),
            from_items(request.query_params.multi_items()),
        )
        if self._vacuum(flags):
            values = vacuum(values)
        decode_values(model, values, Source.form)


@lru_cache(maxsize=1)
def default_binder() -> Binder:
    return Binder()


async def bind_request(request: Request, dest: Any, *flags: Flag) -> None:
    await default_binder().request(request, dest, *flags)


def bind_path(request: Request, dest: Any, *flags: Flag) -> None:
    default_binder().path(request, dest, *flags)


def bind_header(request: Request, dest: Any, *flags: Flag) -> None:
    default_binder().header(request, dest, *flags)


def bind_query(request: Request, dest: Any, *flags: Flag) -> None:
    default_binder().query(request, dest, *flags)


async def bind_body(request: Request, dest: Any, *flags: Flag) -> None:
    await default_binder().body(request, dest, *flags)


# --- Module Notes -----------------------------------------------------------
# `default_binder` reads settings once; call `default_binder.cache_clear()`
# together with `get_settings.cache_clear()` after changing REQBIND_* env vars.
