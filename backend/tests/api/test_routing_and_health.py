"""Routing & Health - 404/405 envelopes and liveness/readiness probes.

Tests:
    - unsupported method on a known path → 405 METHOD_NOT_ALLOWED envelope
    - unknown path → 404 RESOURCE_NOT_FOUND envelope
    - unmapped framework statuses keep their client/server side
    - readiness reflects whether the document stores are open
"""

import pytest
from starlette.exceptions import HTTPException as StarletteHTTPException

import keydrop.infrastructure.store_manager as store_module
from keydrop.api.error_handlers import _to_keydrop_error
from keydrop.infrastructure.store_manager import DocumentStoreManager


async def test_unsupported_method_is_405(client):
    res = await client.delete("/user/register")
    assert res.status_code == 405
    assert res.json()["error"]["code"] == "METHOD_NOT_ALLOWED"


async def test_unsupported_method_on_message_send_is_405(client):
    res = await client.put("/message/send", json={})
    assert res.status_code == 405


async def test_unknown_route_is_404(client):
    res = await client.get("/nowhere")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["message"] == "Route Not Found"


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_open_stores(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"users": "open", "messages": "open"}


async def test_readiness_before_stores_open(client, tmp_path, monkeypatch):
    monkeypatch.setattr(
        store_module, "store_manager", DocumentStoreManager(tmp_path / "unopened"),
    )
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["status"] == "not_ready"


async def test_api_docs_served(client):
    res = await client.get("/openapi.json")
    assert res.status_code == 200
    assert "/message/send" in res.json()["paths"]


@pytest.mark.parametrize("status_code", [413, 415, 429])
def test_unmapped_client_status_stays_client_error(status_code):
    error = _to_keydrop_error(StarletteHTTPException(status_code, "Too much"))
    assert error.http_status == 400
    assert error.code == "BAD_REQUEST"
    assert error.message == "Too much"


def test_unmapped_server_status_is_internal_error():
    error = _to_keydrop_error(StarletteHTTPException(503, "Unavailable"))
    assert error.http_status == 500
    assert error.code == "INTERNAL_ERROR"
