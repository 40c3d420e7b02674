"""
tests.test_deps

End-to-end tests of the FastAPI dependency against an in-process app.
"""

from __future__ import annotations

from typing import Annotated, Any

import httpx
import pytest
from fastapi import Depends, FastAPI
from pydantic import BaseModel

from reqbind import VACUUM, Binder, Form, Header, Path, Query
from reqbind.deps import binder_dep, bound


class GetOrder(BaseModel):
    account: Annotated[int, Path()]
    order_id: Annotated[str, Path("order")]
    trace: Annotated[str | None, Header("X-Trace-Id")] = None
    expand: Annotated[bool, Query()] = False


class CreateOrder(BaseModel):
    account: Annotated[int, Path()]
    sku: str
    quantity: int = 1


class TokenCheck(BaseModel):
    token: Annotated[str, Query("-"), Header("X-Token")]


class RenameOrder(BaseModel):
    order_id: Annotated[str, Path("order")]
    title: Annotated[str, Form()] = ""


def create_app() -> FastAPI:
    app = FastAPI()

    @app.get("/accounts/{account}/orders/{order}")
    async def get_order(params: GetOrder = Depends(bound(GetOrder))) -> dict[str, Any]:
        return params.model_dump()

    @app.post("/accounts/{account}/orders")
    async def create_order(body: CreateOrder = Depends(bound(CreateOrder))) -> dict[str, Any]:
        return body.model_dump()

    @app.post("/orders/{order}/rename")
    async def rename_order(
        body: RenameOrder = Depends(bound(RenameOrder, VACUUM)),
    ) -> dict[str, Any]:
        return body.model_dump()

    @app.get("/token")
    async def check_token(params: TokenCheck = Depends(bound(TokenCheck))) -> dict[str, Any]:
        return params.model_dump()

    return app


def _client(app: FastAPI) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_get_binds_path_header_and_query() -> None:
    async with _client(create_app()) as client:
        r = await client.get(
            "/accounts/7/orders/A-1", params={"expand": "true"}, headers={"X-Trace-Id": "t"}
        )

    assert r.status_code == 200
    assert r.json() == {"account": 7, "order_id": "A-1", "trace": "t", "expand": True}


@pytest.mark.asyncio
async def test_post_binds_json_body() -> None:
    async with _client(create_app()) as client:
        r = await client.post("/accounts/7/orders", json={"sku": "desk", "quantity": 2})

    assert r.status_code == 200
    assert r.json() == {"account": 7, "sku": "desk", "quantity": 2}


@pytest.mark.asyncio
async def test_form_binding_with_vacuum() -> None:
    async with _client(create_app()) as client:
        r = await client.post("/orders/A-1/rename", data={"title": "  New title  "})

    assert r.status_code == 200
    assert r.json() == {"order_id": "A-1", "title": "New title"}


@pytest.mark.asyncio
async def test_conversion_error_is_422() -> None:
    async with _client(create_app()) as client:
        r = await client.get("/accounts/abc/orders/A-1")

    assert r.status_code == 422
    detail = r.json()["detail"]
    assert detail[0]["loc"] == ["path", "account"]


@pytest.mark.asyncio
async def test_missing_required_field_is_422() -> None:
    async with _client(create_app()) as client:
        r = await client.post("/accounts/7/orders", json={"quantity": 2})

    assert r.status_code == 422
    detail = r.json()["detail"]
    assert [d["loc"] for d in detail] == [["body", "sku"]]
    assert detail[0]["type"] == "missing"


@pytest.mark.asyncio
async def test_malformed_body_is_422() -> None:
    async with _client(create_app()) as client:
        r = await client.post(
            "/accounts/7/orders",
            content=b"{oops",
            headers={"Content-Type": "application/json"},
        )

    assert r.status_code == 422
    assert r.json()["detail"][0]["loc"] == ["body"]


@pytest.mark.asyncio
async def test_binder_can_be_overridden() -> None:
    app = create_app()
    app.dependency_overrides[binder_dep] = lambda: Binder(
        path_value=lambda _request, name: {"account": "42", "order": "B-2"}.get(name)
    )

    async with _client(app) as client:
        r = await client.get("/accounts/7/orders/A-1")

    assert r.status_code == 200
    assert r.json()["account"] == 42
    assert r.json()["order_id"] == "B-2"


@pytest.mark.asyncio
async def test_missing_field_reports_its_bindable_tag() -> None:
    async with _client(create_app()) as client:
        r = await client.get("/token", params={"token": "ignored"})

    assert r.status_code == 422
    assert r.json()["detail"][0]["loc"] == ["header", "X-Token"]
