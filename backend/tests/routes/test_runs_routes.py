"""
Tests for the generation run, asset and cost routes
"""

import dataclasses
import time

import pytest
from fastapi.testclient import TestClient

from app.config import ASSET_ERROR
from app.main import create_app
from app.services.container import wire_services


def _poll_until_finished(client, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        body = client.get("/api/runs/current").json()
        if body["status"] != "running":
            return body
        time.sleep(0.01)
    raise AssertionError("generation run did not finish in time")


def _analyze(client, script="A plain story."):
    response = client.post("/api/analyze-script", json={"script": script})
    assert response.status_code == 200
    return response.json()["scenes"]


class TestStartRun:
    def test_no_scenes_conflict(self, api_client):
        response = api_client.post("/api/runs")

        assert response.status_code == 409
        assert "analyze a script first" in response.json()["error"]

    def test_no_run_yet(self, api_client):
        response = api_client.get("/api/runs/current")

        assert response.status_code == 404
        assert response.json() == {"error": "No generation run has been started"}

    def test_run_completes(self, api_client, image_service, speech_service):
        _analyze(api_client)

        response = api_client.post("/api/runs")
        assert response.status_code == 202
        started = response.json()
        assert started["total_scenes"] == 2
        assert started["preset"] == "digital-futurism"

        body = _poll_until_finished(api_client)

        assert body["id"] == started["id"]
        assert body["status"] == "complete"
        assert body["cursor"] == 2
        assert body["progress"] == 100
        assert body["finished_at"] is not None
        assert set(body["assets"]) == {"0", "1"}
        assert body["assets"]["0"]["image"].startswith("data:image/png;base64,")
        assert body["cost"]["images"] == 2
        assert len(image_service.calls) == 2
        assert len(speech_service.calls) == 2

    def test_explicit_preset(self, api_client, image_service, speech_service):
        _analyze(api_client)

        response = api_client.post("/api/runs", json={"preset": "bible-stories"})
        assert response.json()["preset"] == "bible-stories"
        _poll_until_finished(api_client)

        assert image_service.calls[0][1].startswith(", biblical era oil painting")
        assert speech_service.calls[0][1] == "Calm Female (Zephyr)"

    def test_unknown_preset(self, api_client):
        _analyze(api_client)

        response = api_client.post("/api/runs", json={"preset": "neon"})

        assert response.status_code == 400
        assert api_client.get("/api/runs/current").status_code == 404

    def test_failed_modality_recorded(self, settings, analyzer, make_image_service, speech_service):
        container = wire_services(settings, analyzer, make_image_service(fail_on=[0]), speech_service)

        with TestClient(create_app(container=container)) as client:
            _analyze(client)
            client.post("/api/runs")
            body = _poll_until_finished(client)
            assets = client.get("/api/assets").json()
            cost = client.get("/api/cost").json()

        assert body["status"] == "complete"
        assert assets["assets"]["0"]["image"] == ASSET_ERROR
        assert assets["assets"]["0"]["audio"].startswith("data:audio/wav;base64,")
        assert assets["assets"]["1"]["image"].startswith("data:image/png;base64,")
        assert cost["images"] == 2
        assert cost["image_cost"] == pytest.approx(0.08)


class TestRunLifecycle:
    @pytest.fixture
    def slow_client(self, settings, analyzer, image_service, speech_service):
        paced = dataclasses.replace(settings, scene_pace_seconds=30.0)
        container = wire_services(paced, analyzer, image_service, speech_service)
        with TestClient(create_app(container=container)) as client:
            yield client

    def _wait_for_first_scene(self, client):
        deadline = time.monotonic() + 5.0
        while time.monotonic() < deadline:
            if client.get("/api/runs/current").json()["cursor"] >= 1:
                return
            time.sleep(0.01)
        raise AssertionError("first scene did not settle in time")

    def test_second_start_conflicts(self, slow_client):
        _analyze(slow_client)
        assert slow_client.post("/api/runs").status_code == 202

        response = slow_client.post("/api/runs")

        assert response.status_code == 409
        assert "already in progress" in response.json()["error"]

    def test_cancel(self, slow_client):
        _analyze(slow_client)
        slow_client.post("/api/runs")
        self._wait_for_first_scene(slow_client)

        response = slow_client.post("/api/runs/current/cancel")
        assert response.json() == {"cancelled": True}

        body = _poll_until_finished(slow_client)
        assert body["status"] == "cancelled"
        assert body["cursor"] == 1
        assert set(body["assets"]) == {"0"}

        assert slow_client.post("/api/runs/current/cancel").json() == {"cancelled": False}

    def test_new_analysis_supersedes_run(self, slow_client):
        _analyze(slow_client)
        slow_client.post("/api/runs")
        self._wait_for_first_scene(slow_client)

        _analyze(slow_client, script="A different story.")

        body = _poll_until_finished(slow_client)
        assert body["status"] == "superseded"
        assert body["assets"] == {}
        assert slow_client.get("/api/assets").json() == {"generation": 2, "assets": {}}

        # The new scene list can be generated right away
        assert slow_client.post("/api/runs").status_code == 202

    def test_new_analysis_during_hung_call_allows_new_run(self, settings, analyzer, make_image_service, speech_service):
        image_service = make_image_service(hang_on=[0])
        container = wire_services(settings, analyzer, image_service, speech_service)

        with TestClient(create_app(container=container)) as client:
            _analyze(client)
            assert client.post("/api/runs").status_code == 202
            deadline = time.monotonic() + 5.0
            while not image_service.calls:
                assert time.monotonic() < deadline, "image call was never issued"
                time.sleep(0.01)

            _analyze(client, script="A different story.")
            assert client.get("/api/runs/current").json()["status"] == "superseded"

            response = client.post("/api/runs")
            assert response.status_code == 202
            body = _poll_until_finished(client)

        assert body["id"] == response.json()["id"]
        assert body["status"] == "complete"
        assert body["generation"] == 2


def test_cost_without_assets(api_client):
    _analyze(api_client)

    cost = api_client.get("/api/cost").json()

    assert cost["images"] == 0
    assert cost["characters"] == len("The first scene.") + len("The second scene.")
    assert cost["total"] == pytest.approx(cost["audio_cost"])
