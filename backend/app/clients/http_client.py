"""
HTTP client for a running Creator Station server.

Wraps the per-scene endpoints so the same AssetOrchestrator that drives
server-side runs can drive a run from outside the server, the way the
browser front end does.
"""

from typing import Any, Dict, List, Optional

import httpx

from app.core import get_logger
from app.core.exceptions import (
    AnalysisFailed,
    ImageGenFailed,
    RemoteCallError,
    SpeechGenFailed,
    ValidationError,
)

logger = get_logger(__name__, component="http_client")

DEFAULT_BASE_URL = "http://localhost:8080"


class CreatorStationClient:
    """Async client for the /api endpoints.

    Usage:
        async with CreatorStationClient("http://localhost:8080") as client:
            scenes = await client.analyze_script(script, timing_rule=13)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "CreatorStationClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def image_service(self) -> "HttpImageService":
        return HttpImageService(self)

    @property
    def speech_service(self) -> "HttpSpeechService":
        return HttpSpeechService(self)

    async def _post(self, path: str, payload: Dict[str, Any], failure: type) -> Dict[str, Any]:
        try:
            response = await self._client.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"POST {path} failed", extra={"error": repr(e)})
            raise failure(detail=repr(e)) from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code == 400:
            raise ValidationError(data.get("error") or "Invalid request")
        if response.is_error:
            message = data.get("error") or f"HTTP {response.status_code}"
            raise failure(message, detail=f"HTTP {response.status_code}")
        return data

    async def analyze_script(self, script: str, timing_rule: Optional[float] = None) -> List[str]:
        payload: Dict[str, Any] = {"script": script}
        if timing_rule is not None:
            payload["timingRule"] = timing_rule
        data = await self._post("/api/analyze-script", payload, AnalysisFailed)
        scenes = data.get("scenes")
        if not isinstance(scenes, list) or not scenes:
            raise AnalysisFailed(detail="server returned no scenes")
        return scenes

    async def generate_image(self, scene: str, prompt_suffix: str) -> str:
        data = await self._post(
            "/api/generate-image", {"scene": scene, "promptSuffix": prompt_suffix}, ImageGenFailed
        )
        if not data.get("imageUrl"):
            raise ImageGenFailed(detail="response missing imageUrl")
        return data["imageUrl"]

    async def generate_speech(self, scene: str, voice: str) -> str:
        data = await self._post(
            "/api/generate-speech", {"scene": scene, "voice": voice}, SpeechGenFailed
        )
        if not data.get("audioUrl"):
            raise SpeechGenFailed(detail="response missing audioUrl")
        return data["audioUrl"]

    async def health(self) -> Dict[str, Any]:
        try:
            response = await self._client.get("/health")
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise RemoteCallError(f"Server at {self.base_url} is not reachable", detail=repr(e)) from e
        return response.json()


class HttpImageService:
    """Image service over HTTP, shaped like ImageGenerator."""

    def __init__(self, client: CreatorStationClient):
        self.client = client

    async def generate(self, scene: str, style_suffix: str = "") -> str:
        return await self.client.generate_image(scene, style_suffix)


class HttpSpeechService:
    """Speech service over HTTP, shaped like SpeechGenerator."""

    def __init__(self, client: CreatorStationClient):
        self.client = client

    async def generate(self, scene: str, voice_label: str = "") -> str:
        return await self.client.generate_speech(scene, voice_label)


__all__ = [
    "CreatorStationClient",
    "HttpImageService",
    "HttpSpeechService",
    "DEFAULT_BASE_URL",
]
