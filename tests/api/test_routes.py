"""API routes — component inspection, Box projection, payload resolution, error envelopes."""

import json

import httpx


async def test_health_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_get_component_returns_decoded_record(client, seed_components):
    res = await client.get("/api/v1/components/COM001")

    assert res.status_code == 200
    body = res.json()
    assert body["component"]["name"] == "tomcat"
    assert body["component"]["repo"]["rtype"] == "source"
    assert body["skipped"] == []


async def test_get_component_lists_skipped_elements(client, seed_components):
    res = await client.get("/api/v1/components/NOREPO")

    body = res.json()
    assert body["component"]["operations"] == []
    assert body["skipped"][0]["field"] == "operations"
    assert body["skipped"][0]["index"] == 0


async def test_get_missing_component_is_404_envelope(client, seed_components):
    res = await client.get("/api/v1/components/nope")

    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "COMPONENT_NOT_FOUND"
    assert error["context"]["component_id"] == "nope"


async def test_get_box(client, seed_components):
    res = await client.get("/api/v1/components/COM001/box")

    assert res.status_code == 200
    box = res.json()
    assert box["level"] == "some"
    assert box["domain_name"] == "megambox.com"
    assert box["public_ip"] == "192.168.1.10"
    assert box["repo"]["one_click"] is True


async def test_get_box_without_repo(client, seed_components):
    res = await client.get("/api/v1/components/NOREPO/box")
    assert res.json()["repo"] is None


async def test_resolve_payload_locally(client, authority):
    payload = {"id": "p-1", "cat_id": "cat-1", "action": "create", "category": "app"}

    res = await client.post("/api/v1/payloads/resolve", content=json.dumps(payload))

    assert res.status_code == 200
    assert res.json()["cat_id"] == "cat-1"
    assert authority["calls"] == []


async def test_resolve_payload_remotely(client, authority):
    authority["response"] = httpx.Response(
        200, json={"Results": {"id": "p-1", "cat_id": "cat-9", "action": "update"}},
    )

    res = await client.post("/api/v1/payloads/resolve", content=b'{"id": "p-1"}')

    assert res.status_code == 200
    assert res.json()["cat_id"] == "cat-9"
    assert len(authority["calls"]) == 1


async def test_resolve_malformed_payload_is_400(client):
    res = await client.post("/api/v1/payloads/resolve", content=b"{nope")

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "PAYLOAD_DECODE_ERROR"


async def test_resolve_remote_failure_is_502(client, authority):
    authority["response"] = httpx.Response(500)

    res = await client.post("/api/v1/payloads/resolve", content=b'{"id": "p-1"}')

    assert res.status_code == 502
    assert res.json()["error"]["code"] == "REMOTE_FETCH_ERROR"
