"""
Tests for the application factory: lifespan, health checks, error envelope
and the single-page front end fallback.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.core.exceptions import ConfigurationError
from app.main import create_app
from app.services.container import build_unready_container


class TestHealth:
    def test_health(self, api_client):
        response = api_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["ready"] is True
        assert body["backend"] == "gemini_api"
        assert body["run_status"] is None

    def test_ready(self, api_client):
        response = api_client.get("/ready")

        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_not_ready(self, settings):
        container = build_unready_container(settings, ConfigurationError("GEMINI_API_KEY missing"))

        with TestClient(create_app(container=container)) as client:
            ready = client.get("/ready")
            health = client.get("/health")

        assert ready.status_code == 503
        assert ready.json()["error"] == "GEMINI_API_KEY missing"
        assert health.status_code == 200
        assert health.json()["ready"] is False

    def test_request_id_echoed(self, api_client):
        response = api_client.get("/health", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"

    def test_request_id_generated(self, api_client):
        assert api_client.get("/health").headers["X-Request-ID"]


class TestLifespan:
    def test_strict_config_aborts_startup(self, tmp_path):
        settings = Settings(use_vertex_ai=False, gemini_api_key=None, strict_config=True, static_dir=tmp_path)

        with pytest.raises(ConfigurationError):
            with TestClient(create_app(settings=settings)):
                pass

    def test_lenient_config_starts_unready(self, tmp_path):
        settings = Settings(use_vertex_ai=False, gemini_api_key=None, strict_config=False, static_dir=tmp_path)

        with TestClient(create_app(settings=settings)) as client:
            assert client.get("/ready").status_code == 503
            assert client.get("/health").status_code == 200

    def test_builds_container_from_settings(self, tmp_path):
        settings = Settings(use_vertex_ai=False, gemini_api_key="key", static_dir=tmp_path)

        with patch("google.genai.Client"):
            app = create_app(settings=settings)
            with TestClient(app) as client:
                assert client.get("/ready").status_code == 200
                assert app.state.container.settings is settings


class TestFrontend:
    @pytest.fixture
    def site_client(self, settings, container):
        static_dir = settings.static_dir
        (static_dir / "assets").mkdir(parents=True)
        (static_dir / "index.html").write_text("<html>creator station</html>", encoding="utf-8")
        (static_dir / "assets" / "app.js").write_text("console.log('hi')", encoding="utf-8")
        with TestClient(create_app(container=container)) as client:
            yield client

    def test_root_serves_index(self, site_client):
        response = site_client.get("/")

        assert response.status_code == 200
        assert "creator station" in response.text

    def test_static_file(self, site_client):
        response = site_client.get("/assets/app.js")

        assert response.status_code == 200
        assert "console.log" in response.text

    def test_client_side_route_falls_back_to_index(self, site_client):
        response = site_client.get("/scenes/3/edit")

        assert response.status_code == 200
        assert "creator station" in response.text

    def test_path_traversal_falls_back_to_index(self, site_client):
        response = site_client.get("/..%2F..%2Fetc%2Fpasswd")

        assert response.status_code == 200
        assert "creator station" in response.text

    def test_unknown_api_path_is_json_404(self, site_client):
        response = site_client.get("/api/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    def test_missing_build(self, api_client):
        response = api_client.get("/")

        assert response.status_code == 404
        assert response.json() == {"error": "Front end is not built"}
