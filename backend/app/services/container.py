"""
Service container - builds every service once from typed Settings.

The container is created during application startup and stored on
``app.state.container``; route handlers receive it through a dependency.
Tests build one directly with fakes in place of the remote services.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.config import Settings
from app.core import get_logger
from app.core.exceptions import ConfigurationError, ServiceUnavailableError

from .content import ScriptAnalyzer
from .infrastructure.llm import create_client
from .media import ImageGenerator, SpeechGenerator
from .orchestration import AssetOrchestrator, SceneStore

logger = get_logger(__name__, component="container")


@dataclass
class ServiceContainer:
    settings: Settings
    store: SceneStore
    orchestrator: Optional[AssetOrchestrator] = None
    analyzer: Optional[ScriptAnalyzer] = None
    image_generator: Optional[ImageGenerator] = None
    speech_generator: Optional[SpeechGenerator] = None
    client: Any = None
    startup_error: Optional[str] = None

    @property
    def ready(self) -> bool:
        return (
            self.startup_error is None
            and self.analyzer is not None
            and self.image_generator is not None
            and self.speech_generator is not None
            and self.orchestrator is not None
        )

    def require_ready(self) -> "ServiceContainer":
        if not self.ready:
            raise ServiceUnavailableError(
                f"Service is not configured: {self.startup_error or 'remote clients unavailable'}"
            )
        return self

    def readiness(self) -> Dict[str, Any]:
        return {
            "ready": self.ready,
            "backend": self.settings.backend,
            "error": self.startup_error,
            "services": {
                "analyzer": self.analyzer is not None,
                "image_generator": self.image_generator is not None,
                "speech_generator": self.speech_generator is not None,
                "orchestrator": self.orchestrator is not None,
            },
        }


def wire_services(
    settings: Settings,
    analyzer,
    image_generator,
    speech_generator,
    client: Any = None,
    store: Optional[SceneStore] = None,
) -> ServiceContainer:
    """Assemble a ready container around already-built remote services."""
    store = store or SceneStore()
    orchestrator = AssetOrchestrator(
        store,
        image_generator,
        speech_generator,
        pace_seconds=settings.scene_pace_seconds,
        call_timeout_seconds=settings.remote_call_timeout_seconds,
    )
    return ServiceContainer(
        settings=settings,
        store=store,
        orchestrator=orchestrator,
        analyzer=analyzer,
        image_generator=image_generator,
        speech_generator=speech_generator,
        client=client,
    )


def build_container(settings: Settings) -> ServiceContainer:
    """Create the provider client and every service for ``settings``.

    Raises:
        ConfigurationError: the selected backend is missing required config.
    """
    settings.validate()
    client = create_client(settings)
    timeout = settings.remote_call_timeout_seconds
    models = settings.models

    container = wire_services(
        settings,
        analyzer=ScriptAnalyzer(client, models.text_model, timeout_seconds=timeout),
        image_generator=ImageGenerator(client, models.image_model, timeout_seconds=timeout),
        speech_generator=SpeechGenerator(client, models.tts_model, timeout_seconds=timeout),
        client=client,
    )
    logger.info(
        "Services wired",
        extra={
            "backend": settings.backend,
            "text_model": models.text_model,
            "image_model": models.image_model,
            "tts_model": models.tts_model,
            "pace_seconds": settings.scene_pace_seconds,
            "timeout_seconds": timeout,
        },
    )
    return container


def build_unready_container(settings: Settings, error: ConfigurationError) -> ServiceContainer:
    """Container for a lenient startup: scene state only, no remote services."""
    logger.warning("Starting without remote services", extra={"error": str(error)})
    return ServiceContainer(settings=settings, store=SceneStore(), startup_error=str(error))
