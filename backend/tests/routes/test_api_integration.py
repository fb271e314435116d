"""
Integration tests for the script analysis, media and preset routes

The remote services are fakes wired into a real container; every request goes
through the FastAPI app, its exception handlers and the response models.
"""

import pytest
from fastapi.testclient import TestClient

from app.config import PRESETS
from app.core import parse_data_uri
from app.core.exceptions import AnalysisFailed, ConfigurationError
from app.main import create_app
from app.services.container import build_unready_container, wire_services
from app.services.orchestration import AssetResult


class TestAnalyzeScript:
    def test_success_replaces_scene_list(self, api_client, container, analyzer):
        response = api_client.post("/api/analyze-script", json={"script": "A plain story.", "timingRule": 8})

        assert response.status_code == 200
        assert response.json() == {"scenes": ["The first scene.", "The second scene."]}
        analyzer.analyze.assert_awaited_once_with("A plain story.", 8)
        assert container.store.scenes == ["The first scene.", "The second scene."]
        assert container.store.generation == 1

        scenes = api_client.get("/api/scenes").json()
        assert scenes == {"scenes": ["The first scene.", "The second scene."], "generation": 1}

    def test_timing_defaults_to_detected_preset(self, api_client, container, analyzer):
        response = api_client.post("/api/analyze-script", json={"script": "Design a productivity system."})

        assert response.status_code == 200
        analyzer.analyze.assert_awaited_once_with("Design a productivity system.", PRESETS["productivity-sketch"].timing)
        assert container.store.preset_key == "productivity-sketch"

    def test_reanalysis_clears_assets(self, api_client, container):
        api_client.post("/api/analyze-script", json={"script": "one"})
        container.store.merge_asset(container.store.generation, 0, _asset())

        api_client.post("/api/analyze-script", json={"script": "two"})

        assert container.store.generation == 2
        assert api_client.get("/api/assets").json() == {"generation": 2, "assets": {}}

    @pytest.mark.parametrize("body", [{"script": ""}, {"script": "   \n"}])
    def test_blank_script_rejected(self, api_client, analyzer, body):
        response = api_client.post("/api/analyze-script", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "script is required"}
        analyzer.analyze.assert_not_awaited()

    def test_missing_script_rejected(self, api_client):
        response = api_client.post("/api/analyze-script", json={"timingRule": 8})

        assert response.status_code == 400
        assert "script" in response.json()["error"]

    def test_analysis_failure_is_generic(self, api_client, container, analyzer):
        analyzer.analyze.side_effect = AnalysisFailed(detail="HTTP 500 from provider: quota")

        response = api_client.post("/api/analyze-script", json={"script": "A plain story."})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to analyze script"}
        assert container.store.is_empty()


class TestMediaRoutes:
    def test_generate_image(self, api_client, image_service):
        response = api_client.post(
            "/api/generate-image",
            json={"scene": "A lighthouse at dusk", "promptSuffix": ", oil painting"},
        )

        assert response.status_code == 200
        mime, data = parse_data_uri(response.json()["imageUrl"])
        assert mime == "image/png"
        assert data == b"image:A lighthouse at dusk"
        assert image_service.calls == [("A lighthouse at dusk", ", oil painting")]

    def test_generate_speech(self, api_client, speech_service):
        response = api_client.post(
            "/api/generate-speech",
            json={"scene": "Hello there.", "voice": "Calm Female (Zephyr)"},
        )

        assert response.status_code == 200
        assert response.json()["audioUrl"].startswith("data:audio/wav;base64,")
        assert speech_service.calls == [("Hello there.", "Calm Female (Zephyr)")]

    @pytest.mark.parametrize("path,body", [
        ("/api/generate-image", {"scene": "x"}),
        ("/api/generate-image", {"promptSuffix": ""}),
        ("/api/generate-speech", {"scene": "x"}),
    ])
    def test_missing_fields_rejected(self, api_client, path, body):
        response = api_client.post(path, json=body)

        assert response.status_code == 400
        assert "error" in response.json()

    def test_image_failure(self, settings, analyzer, make_image_service, speech_service):
        app = _app_with(settings, analyzer, make_image_service(fail_on=[0]), speech_service)
        with TestClient(app) as client:
            response = client.post("/api/generate-image", json={"scene": "x", "promptSuffix": ""})

        assert response.status_code == 500
        assert response.json() == {"error": "image failed"}

    def test_speech_failure(self, settings, analyzer, image_service, make_speech_service):
        app = _app_with(settings, analyzer, image_service, make_speech_service(fail_on=[0]))
        with TestClient(app) as client:
            response = client.post("/api/generate-speech", json={"scene": "x", "voice": "Kore"})

        assert response.status_code == 500
        assert response.json() == {"error": "audio failed"}


class TestUnreadyService:
    def test_remote_routes_return_503(self, settings):
        container = build_unready_container(settings, ConfigurationError("GEMINI_API_KEY missing"))

        with TestClient(create_app(container=container)) as client:
            analyze = client.post("/api/analyze-script", json={"script": "x"})
            image = client.post("/api/generate-image", json={"scene": "x", "promptSuffix": ""})
            scenes = client.get("/api/scenes")

        assert analyze.status_code == 503
        assert "GEMINI_API_KEY missing" in analyze.json()["error"]
        assert image.status_code == 503
        assert scenes.status_code == 200


class TestPresetRoutes:
    def test_list(self, api_client):
        body = api_client.get("/api/presets").json()

        assert body["default"] == "digital-futurism"
        assert [p["key"] for p in body["presets"]] == list(PRESETS)
        voices = {v["label"]: v["voice_id"] for v in body["voices"]}
        assert voices["Calm Female (Zephyr)"] == "Zephyr"
        for preset in body["presets"]:
            assert preset["voice"] in voices

    def test_detect(self, api_client):
        response = api_client.post("/api/presets/detect", json={"script": "Jesus taught them"})

        assert response.status_code == 200
        assert response.json()["preset"] == "bible-stories"
        assert response.json()["details"]["voice"] == "Calm Female (Zephyr)"

    def test_detect_keeps_current(self, api_client):
        response = api_client.post(
            "/api/presets/detect",
            json={"script": "nothing special", "current": "productivity-sketch"},
        )

        assert response.json()["preset"] == "productivity-sketch"

    def test_detect_unknown_current(self, api_client):
        response = api_client.post("/api/presets/detect", json={"script": "x", "current": "neon"})

        assert response.status_code == 400
        assert "Unknown preset" in response.json()["error"]


def _asset():
    return AssetResult(image="data:image/png;base64,eA==", audio="error")


def _app_with(settings, analyzer, image_service, speech_service):
    return create_app(container=wire_services(settings, analyzer, image_service, speech_service))
