"""
Model Configuration

Defines the Google models used by each remote call of the service.

=== BACKEND CONFIGURATION ===

Set USE_VERTEX_AI to switch backends:
    - "true"  : Vertex AI (requires GCP_PROJECT_ID, optional GCP_LOCATION)
    - "false" : Gemini API (requires GEMINI_API_KEY)

Each model can be overridden through its environment variable:
    TEXT_MODEL   - scene splitting (default: gemini-2.5-flash)
    IMAGE_MODEL  - scene images (default: imagen-3.0-generate-002)
    TTS_MODEL    - narration (default: gemini-2.5-flash-preview-tts)
"""

import os
from dataclasses import dataclass


DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "imagen-3.0-generate-002"
DEFAULT_TTS_MODEL = "gemini-2.5-flash-preview-tts"


@dataclass(frozen=True)
class ModelConfig:
    """Model names for the three remote calls"""
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    tts_model: str = DEFAULT_TTS_MODEL

    @classmethod
    def from_env(cls) -> "ModelConfig":
        return cls(
            text_model=os.getenv("TEXT_MODEL", DEFAULT_TEXT_MODEL),
            image_model=os.getenv("IMAGE_MODEL", DEFAULT_IMAGE_MODEL),
            tts_model=os.getenv("TTS_MODEL", DEFAULT_TTS_MODEL),
        )


__all__ = [
    "DEFAULT_TEXT_MODEL",
    "DEFAULT_IMAGE_MODEL",
    "DEFAULT_TTS_MODEL",
    "ModelConfig",
]
