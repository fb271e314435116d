"""
Speech Generator - narration audio for one scene using Gemini TTS

The preset's human-readable voice label is resolved to a prebuilt Gemini
voice. Gemini TTS returns raw 24 kHz / 16-bit / mono PCM, which is wrapped
into a WAV container in memory and returned as a data URI.
"""

import asyncio

from app.core import get_logger, LogTimer, pcm_to_wav, resolve_voice, to_data_uri
from app.core.exceptions import SpeechGenFailed, ValidationError

logger = get_logger(__name__, component="speech_generator")

AUDIO_MIME_TYPE = "audio/wav"


class SpeechGenerator:
    """Remote narration service client"""

    def __init__(self, client, model: str, timeout_seconds: float = 120.0):
        self.client = client
        self.model = model
        self.timeout_seconds = timeout_seconds

    async def generate(self, scene: str, voice_label: str = "") -> str:
        """Synthesize the scene narration and return it as a WAV data URI.

        Unknown voice labels fall back to the default voice rather than
        failing the request.
        """
        if not scene or not scene.strip():
            raise ValidationError("scene is required")

        voice = resolve_voice(voice_label)
        try:
            with LogTimer(logger, f"speech synthesis ({len(scene)} chars, voice={voice})"):
                pcm = await asyncio.wait_for(
                    asyncio.to_thread(
                        self.client.models.generate_speech,
                        model=self.model,
                        text=scene.strip(),
                        voice=voice,
                    ),
                    timeout=self.timeout_seconds,
                )
            if not pcm:
                raise ValueError("TTS model returned an empty payload")
        except Exception as e:
            logger.error("Speech generation failed", extra={"error": repr(e), "voice": voice})
            raise SpeechGenFailed(detail=repr(e)) from e

        return to_data_uri(pcm_to_wav(pcm), AUDIO_MIME_TYPE)
