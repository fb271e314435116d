"""
Central voice catalog for narration.

Presets refer to voices by a human-readable label; the narration service
needs a Gemini TTS prebuilt voice name. This module is the single source of
truth for that mapping.
"""

from __future__ import annotations

from typing import Dict, List

from .logging import get_logger

logger = get_logger(__name__, component="voice_catalog")

# Gemini TTS prebuilt voices (voice id -> style)
GEMINI_TTS_VOICES: Dict[str, str] = {
    "Zephyr": "Bright",
    "Puck": "Upbeat",
    "Charon": "Informative",
    "Kore": "Firm",
    "Fenrir": "Excitable",
    "Leda": "Youthful",
    "Orus": "Firm",
    "Aoede": "Breezy",
    "Enceladus": "Breathy",
    "Iapetus": "Clear",
    "Algieba": "Smooth",
    "Gacrux": "Mature",
    "Sulafat": "Warm",
}

# Preset voice labels -> provider voice id
VOICE_PRESETS: Dict[str, str] = {
    "Deep Male (Fenrir)": "Fenrir",
    "Fast/Crisp Male (Puck)": "Puck",
    "Calm Female (Zephyr)": "Zephyr",
}

DEFAULT_VOICE_ID = "Charon"


def resolve_voice(label: str | None) -> str:
    """Map a voice label to a provider voice id.

    Known preset labels map through VOICE_PRESETS and bare provider voice ids
    pass through. Anything else falls back to DEFAULT_VOICE_ID.
    """
    if label in VOICE_PRESETS:
        return VOICE_PRESETS[label]
    if label in GEMINI_TTS_VOICES:
        return label
    logger.warning(f"Unknown voice '{label}', falling back to {DEFAULT_VOICE_ID}")
    return DEFAULT_VOICE_ID


def list_voice_presets() -> List[Dict[str, str]]:
    """Return preset labels with their provider voice and style."""
    return [
        {"label": label, "voice_id": voice_id, "style": GEMINI_TTS_VOICES.get(voice_id, "")}
        for label, voice_id in VOICE_PRESETS.items()
    ]
