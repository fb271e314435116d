"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - logging.py: Structured logging configuration and utilities
    - exceptions.py: Application exception hierarchy
    - runtime.py: Env parsing and runtime checks
    - media.py: Data URI and audio container helpers
    - voice_catalog.py: Voice label -> provider voice mapping

Usage:
    from app.core import get_logger, resolve_voice, to_data_uri
"""

# Logging
from .logging import (
    setup_logging,
    get_logger,
    set_request_id,
    set_run_id,
    clear_context,
    LogTimer,
)

# Exceptions
from .exceptions import (
    CreatorStationError,
    ValidationError,
    ConfigurationError,
    ServiceUnavailableError,
    RemoteCallError,
    AnalysisFailed,
    ImageGenFailed,
    SpeechGenFailed,
    RunConflictError,
    RunInProgressError,
    NoScenesError,
    RunNotFoundError,
)

# Runtime guards
from .runtime import (
    parse_bool_env,
    parse_float_env,
    static_site_report,
)

# Media utilities
from .media import (
    to_data_uri,
    parse_data_uri,
    pcm_to_wav,
    extension_for_mime,
)

# Voice catalog
from .voice_catalog import (
    GEMINI_TTS_VOICES,
    VOICE_PRESETS,
    DEFAULT_VOICE_ID,
    resolve_voice,
    list_voice_presets,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "set_request_id",
    "set_run_id",
    "clear_context",
    "LogTimer",
    # Exceptions
    "CreatorStationError",
    "ValidationError",
    "ConfigurationError",
    "ServiceUnavailableError",
    "RemoteCallError",
    "AnalysisFailed",
    "ImageGenFailed",
    "SpeechGenFailed",
    "RunConflictError",
    "RunInProgressError",
    "NoScenesError",
    "RunNotFoundError",
    # Runtime guards
    "parse_bool_env",
    "parse_float_env",
    "static_site_report",
    # Media
    "to_data_uri",
    "parse_data_uri",
    "pcm_to_wav",
    "extension_for_mime",
    # Voice catalog
    "GEMINI_TTS_VOICES",
    "VOICE_PRESETS",
    "DEFAULT_VOICE_ID",
    "resolve_voice",
    "list_voice_presets",
]
