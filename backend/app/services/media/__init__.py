"""Media generation - scene images and narration audio."""

from .image_generator import ImageGenerator
from .speech_generator import SpeechGenerator

__all__ = ["ImageGenerator", "SpeechGenerator"]
