"""
tests.conftest

Shared fixtures.

Responsibilities:
- Build Starlette requests from raw ASGI scopes (no server, no router).
- Reset cached settings/binders between tests.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import Any

import pytest
from starlette.requests import Request

from reqbind.binder import default_binder
from reqbind.settings import get_settings


def _make_request(
    method: str = "GET",
    path: str = "/",
    *,
    query: str = "",
    headers: Sequence[tuple[str, str]] = (),
    body: bytes = b"",
    path_params: dict[str, Any] | None = None,
) -> Request:
    raw_headers = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in headers]
    if body and not any(k == b"content-length" for k, _ in raw_headers):
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    scope = {
        "type": "http",
        "http_version": "1.1",
        "scheme": "http",
        "server": ("testserver", 80),
        "root_path": "",
        "method": method,
        "path": path,
        "query_string": query.encode("latin-1"),
        "headers": raw_headers,
        "path_params": path_params or {},
    }

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


@pytest.fixture
def make_request() -> Callable[..., Request]:
    return _make_request


@pytest.fixture(autouse=True)
def _reset_caches() -> Iterator[None]:
    # Settings are env-driven and cached; keep tests independent of each other.
    get_settings.cache_clear()
    default_binder.cache_clear()
    yield
    get_settings.cache_clear()
    default_binder.cache_clear()


# --- Module Notes -----------------------------------------------------------
# End-to-end tests against FastAPI live in `test_deps.py` and use httpx.ASGITransport.
