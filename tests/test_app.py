import logging

from fastapi.testclient import TestClient

from app.main import create_app


def test_cors_allows_any_origin(client):
    r = client.get("/api/load-text", headers={"Origin": "http://example.com"})
    assert r.status_code == 200
    assert "access-control-allow-origin" in r.headers


def test_cors_preflight(client):
    r = client.options(
        "/api/save-text",
        headers={"Origin": "http://example.com", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 200
    assert "access-control-allow-origin" in r.headers


def test_malformed_json_body(client, launcher):
    r = client.post("/api/open-editor", content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid request"
    assert launcher.calls == []


def test_save_without_body(client):
    r = client.post("/api/save-text")
    assert r.json() == {"success": True}
    assert client.get("/api/load-text").json() == {"text": ""}


def test_startup_log_without_voice_host(settings, launcher, caplog):
    caplog.set_level(logging.INFO, logger="voice_gateway.server")
    with TestClient(create_app(settings=settings, launcher=launcher)):
        pass
    messages = [r.getMessage() for r in caplog.records if r.name == "voice_gateway.server"]
    assert "gateway listening on http://localhost:3000" in messages
    assert any("http://<not set, supplied by the page>:8774" in m for m in messages)
    assert any("resolves its voice service from the host the page sends" in m for m in messages)


def test_startup_log_with_voice_host(settings, launcher, caplog):
    caplog.set_level(logging.INFO, logger="voice_gateway.server")
    settings.voice_host = "10.2.2.2"
    with TestClient(create_app(settings=settings, launcher=launcher)):
        pass
    messages = [r.getMessage() for r in caplog.records if r.name == "voice_gateway.server"]
    assert any("http://10.2.2.2:8774" in m for m in messages)
    assert not any("not set" in m for m in messages)
