import httpx
from fastapi.testclient import TestClient

from nepali_relay.routes import create_app
from nepali_relay.settings import settings


def _unused_send(request: httpx.Request) -> httpx.Response:
    return httpx.Response(404, json={"error": "unexpected upstream call"})


def test_health_reports_gemini_status(make_app, monkeypatch):
    app, _ = make_app(_unused_send)

    with TestClient(app=app, base_url="http://test") as client:
        assert client.get("/health").json() == {"status": "ok", "gemini": False}

    monkeypatch.setattr(settings, "gemini_api_key", "gm-test", raising=False)
    with TestClient(app=app, base_url="http://test") as client:
        assert client.get("/health").json() == {"status": "ok", "gemini": True}


def test_lifespan_opens_and_closes_shared_client():
    app = create_app()

    with TestClient(app=app, base_url="http://test"):
        shared = app.state.http_client
        assert isinstance(shared, httpx.AsyncClient)
        assert not shared.is_closed

    assert app.state.http_client is None
    assert shared.is_closed


def test_cors_allows_any_origin_by_default(make_app):
    app, _ = make_app(_unused_send)

    with TestClient(app=app, base_url="http://test") as client:
        resp = client.options(
            "/api/transliterate",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_unhandled_exception_returns_structured_error(make_app):
    app, _ = make_app(_unused_send)

    @app.get("/__raise_unhandled_error")
    async def raise_error():
        raise RuntimeError("boom")

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/__raise_unhandled_error")

    assert response.status_code == 500
    payload = response.json()
    assert payload["error"] == "Server Error"
    assert payload["details"] == "boom"
    assert payload["error_id"]


def test_frontend_serves_files_and_falls_back_to_index(make_app, monkeypatch, tmp_path):
    static_root = tmp_path / "public"
    (static_root / "js").mkdir(parents=True)
    (static_root / "index.html").write_text("<html>lipi</html>", encoding="utf-8")
    (static_root / "js" / "app.js").write_text("console.log('lipi')", encoding="utf-8")
    (tmp_path / "secret.txt").write_text("nope", encoding="utf-8")
    monkeypatch.setattr(settings, "static_dir", str(static_root), raising=False)

    app, _ = make_app(_unused_send)

    with TestClient(app=app, base_url="http://test") as client:
        root = client.get("/")
        script = client.get("/js/app.js")
        deep_link = client.get("/some/client/route")
        escaped = client.get("/..%2Fsecret.txt")
        unknown_api = client.get("/api/unknown")
        health = client.get("/health")

    assert root.status_code == 200
    assert root.text == "<html>lipi</html>"
    assert script.text == "console.log('lipi')"
    assert deep_link.text == "<html>lipi</html>"
    assert "nope" not in escaped.text
    assert unknown_api.status_code == 404
    assert health.json()["status"] == "ok"


def test_no_frontend_directory_means_api_only(make_app):
    app, _ = make_app(_unused_send)

    with TestClient(app=app, base_url="http://test") as client:
        resp = client.get("/index.html")

    assert resp.status_code == 404
