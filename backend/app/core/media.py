"""
Media encoding helpers: data URIs and PCM -> WAV wrapping.
"""

import base64
import io
import re
import wave
from typing import Tuple

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.*)$", re.DOTALL)

# Gemini TTS returns raw 24 kHz, 16-bit, mono PCM
TTS_SAMPLE_RATE = 24000
TTS_SAMPLE_WIDTH = 2
TTS_CHANNELS = 1

MIME_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
    "audio/wav": ".wav",
    "audio/mpeg": ".mp3",
}


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as a base64 data URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def parse_data_uri(uri: str) -> Tuple[str, bytes]:
    """Split a base64 data URI into (mime_type, raw bytes)."""
    match = _DATA_URI_RE.match(uri or "")
    if not match:
        raise ValueError("Not a base64 data URI")
    return match.group("mime"), base64.b64decode(match.group("data"))


def pcm_to_wav(
    pcm: bytes,
    channels: int = TTS_CHANNELS,
    rate: int = TTS_SAMPLE_RATE,
    sample_width: int = TTS_SAMPLE_WIDTH,
) -> bytes:
    """Wrap raw PCM frames in a WAV container, in memory."""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sample_width)
        wf.setframerate(rate)
        wf.writeframes(pcm)
    return buffer.getvalue()


def extension_for_mime(mime_type: str) -> str:
    return MIME_EXTENSIONS.get(mime_type, ".bin")
