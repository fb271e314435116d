import asyncio
from typing import List, Optional, Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.core import to_data_uri
from app.core.exceptions import ImageGenFailed, SpeechGenFailed
from app.main import create_app
from app.services.container import wire_services


PROVIDER_ENV_VARS = (
    "USE_VERTEX_AI",
    "GCP_PROJECT_ID",
    "GCP_LOCATION",
    "GEMINI_API_KEY",
    "TEXT_MODEL",
    "IMAGE_MODEL",
    "TTS_MODEL",
    "SCENE_PACE_SECONDS",
    "REMOTE_CALL_TIMEOUT_SECONDS",
    "STRICT_CONFIG",
    "PORT",
    "HOST",
    "STATIC_DIR",
)


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch):
    """Keep tests independent of the developer's .env / shell"""
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class FakeMediaService:
    """Stand-in for ImageGenerator / SpeechGenerator.

    Records every call and appends start/end markers to a shared event log
    so tests can assert ordering across the two modalities. Calls whose
    0-based call number is in ``fail_on`` raise ``error_cls``.
    """

    def __init__(
        self,
        kind: str,
        mime_type: str,
        event_log: List[tuple],
        fail_on: Sequence[int] = (),
        error_cls=RuntimeError,
        delay: float = 0.0,
        hang_on: Sequence[int] = (),
    ):
        self.kind = kind
        self.mime_type = mime_type
        self.event_log = event_log
        self.fail_on = set(fail_on)
        self.hang_on = set(hang_on)
        self.error_cls = error_cls
        self.delay = delay
        self.calls: List[tuple] = []

    async def generate(self, scene: str, option: str = "") -> str:
        call_number = len(self.calls)
        self.calls.append((scene, option))
        self.event_log.append(("start", self.kind, scene))
        if call_number in self.hang_on:
            await asyncio.sleep(3600)
        await asyncio.sleep(self.delay)
        self.event_log.append(("end", self.kind, scene))
        if call_number in self.fail_on:
            raise self.error_cls(f"{self.kind} failed")
        return to_data_uri(f"{self.kind}:{scene}".encode(), self.mime_type)


@pytest.fixture
def event_log() -> List[tuple]:
    return []


@pytest.fixture
def make_image_service(event_log):
    def _make(fail_on: Sequence[int] = (), **kwargs) -> FakeMediaService:
        return FakeMediaService("image", "image/png", event_log, fail_on=fail_on, **{"error_cls": ImageGenFailed, **kwargs})
    return _make


@pytest.fixture
def make_speech_service(event_log):
    def _make(fail_on: Sequence[int] = (), **kwargs) -> FakeMediaService:
        return FakeMediaService("audio", "audio/wav", event_log, fail_on=fail_on, **{"error_cls": SpeechGenFailed, **kwargs})
    return _make


@pytest.fixture
def image_service(make_image_service) -> FakeMediaService:
    return make_image_service()


@pytest.fixture
def speech_service(make_speech_service) -> FakeMediaService:
    return make_speech_service()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        use_vertex_ai=False,
        gemini_api_key="test-key",
        scene_pace_seconds=0.0,
        remote_call_timeout_seconds=5.0,
        static_dir=tmp_path / "dist",
    )


@pytest.fixture
def analyzer():
    analyzer = MagicMock()
    analyzer.analyze = AsyncMock(return_value=["The first scene.", "The second scene."])
    return analyzer


@pytest.fixture
def container(settings, analyzer, image_service, speech_service):
    return wire_services(settings, analyzer, image_service, speech_service)


@pytest.fixture
def api_client(container):
    with TestClient(create_app(container=container)) as client:
        yield client


@pytest.fixture
def mock_models():
    """Provider ``client.models`` double for the remote service clients"""
    client = MagicMock()
    client.models = MagicMock()
    return client


@pytest.fixture
def text_response():
    """Factory for a generate_content response carrying ``text``"""
    def _make(text: Optional[str]):
        response = MagicMock()
        response.text = text
        return response
    return _make
