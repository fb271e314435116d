"""
Typed runtime settings

Read once during application startup and passed explicitly to the service
container. Module-level constants elsewhere in ``app.config`` are static;
everything that depends on the deployment environment lives here.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from app.core.exceptions import ConfigurationError
from app.core.runtime import parse_bool_env, parse_float_env

from .constants import DEFAULT_HOST, DEFAULT_PORT
from .models import ModelConfig
from .paths import STATIC_DIR


DEFAULT_GCP_LOCATION = "us-central1"
DEFAULT_SCENE_PACE_SECONDS = 1.0
DEFAULT_REMOTE_CALL_TIMEOUT_SECONDS = 120.0


@dataclass(frozen=True)
class Settings:
    """Deployment configuration for the service."""
    use_vertex_ai: bool = True
    gcp_project_id: Optional[str] = None
    gcp_location: str = DEFAULT_GCP_LOCATION
    gemini_api_key: Optional[str] = None
    models: ModelConfig = field(default_factory=ModelConfig)
    scene_pace_seconds: float = DEFAULT_SCENE_PACE_SECONDS
    remote_call_timeout_seconds: float = DEFAULT_REMOTE_CALL_TIMEOUT_SECONDS
    strict_config: bool = True
    static_dir: Path = STATIC_DIR
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @property
    def backend(self) -> str:
        return "vertex_ai" if self.use_vertex_ai else "gemini_api"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (see .env.example)."""
        port_raw = os.getenv("PORT", str(DEFAULT_PORT))
        try:
            port = int(port_raw)
        except ValueError:
            raise ConfigurationError(f"PORT must be an integer, got {port_raw!r}")

        return cls(
            use_vertex_ai=parse_bool_env(os.getenv("USE_VERTEX_AI"), default=True),
            gcp_project_id=os.getenv("GCP_PROJECT_ID") or None,
            gcp_location=os.getenv("GCP_LOCATION", DEFAULT_GCP_LOCATION),
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            models=ModelConfig.from_env(),
            scene_pace_seconds=parse_float_env(
                "SCENE_PACE_SECONDS", DEFAULT_SCENE_PACE_SECONDS, minimum=0.0
            ),
            remote_call_timeout_seconds=parse_float_env(
                "REMOTE_CALL_TIMEOUT_SECONDS", DEFAULT_REMOTE_CALL_TIMEOUT_SECONDS, minimum=1.0
            ),
            strict_config=parse_bool_env(os.getenv("STRICT_CONFIG"), default=True),
            static_dir=Path(os.getenv("STATIC_DIR") or STATIC_DIR),
            host=os.getenv("HOST", DEFAULT_HOST),
            port=port,
        )

    def validate(self) -> None:
        """Raise ConfigurationError when the selected backend is not usable."""
        if self.use_vertex_ai and not self.gcp_project_id:
            raise ConfigurationError(
                "GCP_PROJECT_ID environment variable is required when USE_VERTEX_AI=true"
            )
        if not self.use_vertex_ai and not self.gemini_api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY environment variable is required when USE_VERTEX_AI=false"
            )


__all__ = [
    "Settings",
    "DEFAULT_GCP_LOCATION",
    "DEFAULT_SCENE_PACE_SECONDS",
    "DEFAULT_REMOTE_CALL_TIMEOUT_SECONDS",
]
