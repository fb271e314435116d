"""
Image Generator - one still image per scene

Prompt is the scene narration followed by the active preset's style suffix.
The provider returns encoded PNG bytes which are handed back as a data URI,
so nothing is written to disk.
"""

import asyncio

from app.core import get_logger, LogTimer, to_data_uri
from app.core.exceptions import ImageGenFailed, ValidationError

logger = get_logger(__name__, component="image_generator")

IMAGE_MIME_TYPE = "image/png"
DEFAULT_ASPECT_RATIO = "16:9"


class ImageGenerator:
    """Remote image service client"""

    def __init__(
        self,
        client,
        model: str,
        timeout_seconds: float = 120.0,
        aspect_ratio: str = DEFAULT_ASPECT_RATIO,
    ):
        self.client = client
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.aspect_ratio = aspect_ratio

    @staticmethod
    def build_prompt(scene: str, style_suffix: str = "") -> str:
        return f"{scene.strip()}{style_suffix or ''}"

    async def generate(self, scene: str, style_suffix: str = "") -> str:
        """Generate the image for one scene and return it as a data URI."""
        if not scene or not scene.strip():
            raise ValidationError("scene is required")

        prompt = self.build_prompt(scene, style_suffix)
        try:
            with LogTimer(logger, f"image generation ({len(prompt)} chars)"):
                image_bytes = await asyncio.wait_for(
                    asyncio.to_thread(
                        self.client.models.generate_images,
                        model=self.model,
                        prompt=prompt,
                        aspect_ratio=self.aspect_ratio,
                    ),
                    timeout=self.timeout_seconds,
                )
            if not image_bytes:
                raise ValueError("Image model returned an empty payload")
        except Exception as e:
            logger.error("Image generation failed", extra={"error": repr(e)})
            raise ImageGenFailed(detail=repr(e)) from e

        return to_data_uri(image_bytes, IMAGE_MIME_TYPE)
