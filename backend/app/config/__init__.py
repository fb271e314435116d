"""
Application configuration and settings
"""

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from .paths import APP_DIR, BACKEND_DIR, PROJECT_DIR, STATIC_DIR
from .constants import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
    DEFAULT_HOST,
    DEFAULT_PORT,
    IMAGE_UNIT_COST,
    AUDIO_COST_PER_CHAR,
    ASSET_ERROR,
)
from .models import (
    ModelConfig,
    DEFAULT_TEXT_MODEL,
    DEFAULT_IMAGE_MODEL,
    DEFAULT_TTS_MODEL,
)
from .settings import Settings
from .presets import (
    Preset,
    PRESETS,
    DEFAULT_PRESET,
    get_preset,
    detect_preset,
    list_presets,
)

__all__ = [
    # Paths
    "APP_DIR",
    "BACKEND_DIR",
    "PROJECT_DIR",
    "STATIC_DIR",
    # Constants
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "IMAGE_UNIT_COST",
    "AUDIO_COST_PER_CHAR",
    "ASSET_ERROR",
    # Models
    "ModelConfig",
    "DEFAULT_TEXT_MODEL",
    "DEFAULT_IMAGE_MODEL",
    "DEFAULT_TTS_MODEL",
    # Settings
    "Settings",
    # Presets
    "Preset",
    "PRESETS",
    "DEFAULT_PRESET",
    "get_preset",
    "detect_preset",
    "list_presets",
]
