"""
Mock traffic: resolution end to end, header policy, dynamic CORS,
reserved paths and simulated latency.
"""
import asyncio
import logging
import time

import httpx
import pytest
from fastapi.testclient import TestClient

from mockapi.main import create_app
from mockapi.schemas.endpoint import EndpointCreate, MockResponse
from mockapi.schemas.project import ProjectCreate
from mockapi.services.responder import MockResponder
from mockapi.storage.file import FileStorage

from conftest import make_config
from test_admin_api import create_endpoint, create_project


def test_end_to_end_scenario(client, auth_headers):
    project = create_project(client, auth_headers, name="Demo", base_path="/api/v1")
    create_endpoint(
        client,
        auth_headers,
        project["id"],
        "/users",
        response={"status": 200, "body": {"ok": True}, "headers": {"X-Mock": "users"}},
    )

    resp = client.get("/api/v1/users")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert resp.headers["content-type"] == "application/json"
    assert resp.headers["x-mock"] == "users"

    resp = client.get("/api/v1/orders")
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"] == "Not Found"
    assert "GET /api/v1/orders" in body["message"]


def test_resolution_is_deterministic(client, auth_headers):
    project = create_project(client, auth_headers, base_path="/svc")
    create_endpoint(client, auth_headers, project["id"], "/dup", response={"status": 200, "body": "first"})
    create_endpoint(client, auth_headers, project["id"], "/dup", response={"status": 200, "body": "second"})

    assert client.get("/svc/dup").json() == "first"
    assert client.get("/svc/dup").json() == "first"


def test_longest_base_path_serves(client, auth_headers):
    api = create_project(client, auth_headers, name="Api", base_path="/api")
    v1 = create_project(client, auth_headers, name="V1", base_path="/api/v1")
    create_endpoint(client, auth_headers, api["id"], "/v1/users", response={"status": 200, "body": "api"})
    create_endpoint(client, auth_headers, v1["id"], "/users", response={"status": 200, "body": "v1"})

    assert client.get("/api/v1/users").json() == "v1"


def test_endpoint_headers_override_defaults(client, auth_headers):
    client.put(
        "/api/admin/settings",
        json={"defaultHeaders": {"Content-Type": "application/json", "X-Env": "mock", "X-Shared": "default"}},
        headers=auth_headers,
    )
    project = create_project(client, auth_headers, base_path="/h")
    create_endpoint(
        client,
        auth_headers,
        project["id"],
        "/text",
        response={"status": 201, "body": "hello", "headers": {"content-type": "text/plain", "x-shared": "endpoint"}},
    )

    resp = client.get("/h/text")
    assert resp.status_code == 201
    assert resp.headers["content-type"] == "text/plain"
    assert resp.headers["x-shared"] == "endpoint"
    assert resp.headers["x-env"] == "mock"
    assert resp.headers.get_list("x-shared") == ["endpoint"]


def test_not_found_uses_default_headers(client, auth_headers):
    client.put("/api/admin/settings", json={"defaultHeaders": {"X-Env": "mock"}}, headers=auth_headers)
    resp = client.delete("/nowhere")
    assert resp.status_code == 404
    assert resp.headers["x-env"] == "mock"
    assert resp.json()["message"] == "No mock endpoint configured for DELETE /nowhere"


def test_disabled_endpoint_is_not_served(client, auth_headers):
    project = create_project(client, auth_headers, base_path="/d")
    endpoint = create_endpoint(client, auth_headers, project["id"], "/x")
    client.put(f"/api/admin/endpoints/{endpoint['id']}", json={"enabled": False}, headers=auth_headers)
    assert client.get("/d/x").status_code == 404


def test_all_methods_and_bodyless_status(client, auth_headers):
    project = create_project(client, auth_headers, base_path="/m")
    for method in ("POST", "PUT", "PATCH", "DELETE"):
        create_endpoint(client, auth_headers, project["id"], "/thing", method=method,
                        response={"status": 200, "body": {"method": method}})
    create_endpoint(client, auth_headers, project["id"], "/empty", response={"status": 204, "body": {"ignored": True}})

    for method in ("POST", "PUT", "PATCH", "DELETE"):
        resp = client.request(method, "/m/thing")
        assert resp.json() == {"method": method}

    resp = client.get("/m/empty")
    assert resp.status_code == 204
    assert resp.content == b""


def test_dynamic_cors_rejects_unlisted_origin(client, auth_headers, storage, monkeypatch):
    project = create_project(client, auth_headers, base_path="/c")
    create_endpoint(client, auth_headers, project["id"], "/x")
    client.put("/api/admin/settings", json={"corsOrigins": ["https://a.com"]}, headers=auth_headers)

    calls = []
    original = storage.get_endpoint_by_path

    async def spy(path, method):
        calls.append((path, method))
        return await original(path, method)

    monkeypatch.setattr(storage, "get_endpoint_by_path", spy)

    resp = client.get("/c/x", headers={"Origin": "https://b.com"})
    assert resp.status_code == 403
    assert resp.text == "Origin not allowed"
    assert calls == []

    resp = client.get("/c/x", headers={"Origin": "https://a.com"})
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "https://a.com"
    assert resp.headers["access-control-allow-credentials"] == "true"
    assert calls == [("/c/x", "GET")]

    # no Origin header counts as "*", which is not listed
    assert client.get("/c/x").status_code == 403


def test_dynamic_cors_reads_settings_every_request(client, auth_headers):
    client.put("/api/admin/settings", json={"corsOrigins": ["https://a.com"]}, headers=auth_headers)
    assert client.get("/x", headers={"Origin": "https://b.com"}).status_code == 403

    client.put("/api/admin/settings", json={"corsOrigins": ["https://a.com", "https://b.com"]}, headers=auth_headers)
    assert client.get("/x", headers={"Origin": "https://b.com"}).status_code == 404


def test_preflight_short_circuits(client, auth_headers, storage, monkeypatch):
    client.put(
        "/api/admin/settings",
        json={"corsMethods": ["GET", "POST"], "corsHeaders": ["X-Token"]},
        headers=auth_headers,
    )

    async def explode(path, method):
        raise AssertionError("resolution must not run for preflight")

    monkeypatch.setattr(storage, "get_endpoint_by_path", explode)

    resp = client.options("/api/v1/users", headers={"Origin": "https://ui.example"})
    assert resp.status_code == 204
    assert resp.content == b""
    assert resp.headers["access-control-allow-origin"] == "*"
    assert resp.headers["access-control-allow-methods"] == "GET, POST"
    assert resp.headers["access-control-allow-headers"] == "X-Token"


def test_root_base_path_strips_the_slash(client, auth_headers):
    project = create_project(client, auth_headers, base_path="/")
    create_endpoint(client, auth_headers, project["id"], "/other", response={"status": 200, "body": "root"})

    # "/" is removed from "/other" leaving "other", which no endpoint path matches
    assert client.get("/other").status_code == 404


def test_reserved_paths_bypass_mocks(client, auth_headers, storage, monkeypatch):
    project = create_project(client, auth_headers, base_path="/")
    create_endpoint(client, auth_headers, project["id"], "/index.html")

    calls = []
    original = storage.get_endpoint_by_path

    async def spy(path, method):
        calls.append(path)
        return await original(path, method)

    monkeypatch.setattr(storage, "get_endpoint_by_path", spy)

    resp = client.get("/", follow_redirects=False)
    assert resp.status_code in (302, 307)
    assert resp.headers["location"] == "/index.html"

    resp = client.get("/index.html")
    assert resp.status_code == 404
    assert resp.text == "Not Found"
    assert calls == []

    assert client.get("/other").status_code == 404
    assert calls == ["/other"]


def test_reserved_paths_serve_static_files(tmp_path, storage):
    static_dir = tmp_path / "public"
    static_dir.mkdir()
    (static_dir / "app.js").write_text("console.log('ui');")

    app = create_app(config=make_config(tmp_path), storage=storage)

    with TestClient(app) as client:
        resp = client.get("/app.js")
        assert resp.status_code == 200
        assert "console.log" in resp.text
        assert client.get("/style.css").status_code == 404


@pytest.mark.asyncio
async def test_delay_does_not_block_other_requests(tmp_path):
    storage = FileStorage()
    project = await storage.create_project(ProjectCreate(name="Slow", base_path="/lat"))
    await storage.create_endpoint(
        EndpointCreate(project_id=project.id, path="/slow", method="GET", response=MockResponse(body="slow", delay=200))
    )
    await storage.create_endpoint(
        EndpointCreate(project_id=project.id, path="/fast", method="GET", response=MockResponse(body="fast"))
    )
    app = create_app(config=make_config(tmp_path), storage=storage)

    finished = {}

    async def fetch(client, name, start):
        resp = await client.get(f"/lat/{name}")
        finished[name] = time.perf_counter() - start
        return resp

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        start = time.perf_counter()
        slow_task = asyncio.create_task(fetch(client, "slow", start))
        await asyncio.sleep(0.01)
        fast = await fetch(client, "fast", start)
        slow = await slow_task

    assert slow.json() == "slow"
    assert fast.json() == "fast"
    assert finished["slow"] >= 0.2
    assert finished["fast"] < finished["slow"]
    assert finished["fast"] < 0.2


@pytest.mark.asyncio
async def test_informational_stub_logs_warning(caplog):
    storage = FileStorage()
    project = await storage.create_project(ProjectCreate(name="Info", base_path="/info"))
    endpoint = await storage.create_endpoint(
        EndpointCreate(project_id=project.id, path="/switch", method="GET", response=MockResponse(status=101))
    )

    with caplog.at_level(logging.WARNING, logger="mockapi.services.responder"):
        resp = await MockResponder(storage).handle("GET", "/info/switch")

    assert resp.status_code == 101
    assert resp.body == b""
    assert any(endpoint.id in record.getMessage() for record in caplog.records)
