import pytest
from unittest.mock import AsyncMock, patch

from webgis.errors import InternalError


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(client):
    resp = await client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["ok"] is False


@pytest.mark.asyncio
async def test_malformed_json_body_is_bad_request(client):
    resp = await client.post(
        "/api/submit_feedback",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["ok"] is False


@pytest.mark.asyncio
async def test_corrupt_store_is_masked_as_internal_error(client, data_dir):
    (data_dir / "feedback.json").write_text("{broken", encoding="utf-8")

    resp = await client.get("/api/feedback")

    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "error": "internal_error"}
    assert str(data_dir) not in resp.text


@pytest.mark.asyncio
async def test_unexpected_exception_is_masked(client):
    with patch(
        "webgis.services.responses.ResponseWorkflow.list_all",
        new=AsyncMock(side_effect=RuntimeError("/srv/secret/responses.json exploded")),
    ):
        resp = await client.get("/api/responses")

    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "error": "internal_error"}
    assert "secret" not in resp.text


@pytest.mark.asyncio
async def test_internal_error_message_never_leaks(client):
    with patch(
        "webgis.services.users.UserDirectory.list",
        new=AsyncMock(side_effect=InternalError("cannot open /data/users.json")),
    ):
        resp = await client.get("/api/users")

    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "error": "internal_error"}


@pytest.mark.asyncio
async def test_cors_allows_frontend_origin(client):
    resp = await client.get("/health", headers={"Origin": "http://localhost:3000"})
    assert resp.headers.get("access-control-allow-origin") == "http://localhost:3000"


@pytest.mark.asyncio
async def test_startup_creates_collection_files(client, data_dir):
    assert sorted(p.name for p in data_dir.iterdir()) == ["feedback.json", "responses.json", "users.json"]
