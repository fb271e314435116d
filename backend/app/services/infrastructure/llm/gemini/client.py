"""
Unified Gemini Client - Works with both Gemini API and Vertex AI

This module provides a unified interface for both:
1. Gemini API (using API keys)
2. Vertex AI (using GCP credentials)

The backend is chosen from typed Settings at startup and the client is
created once, then injected into the services that need it. Every backend
exposes the same three calls through ``client.models``:

    generate_content(model, contents, config)  -> SDK response with .text
    generate_images(model, prompt, ...)         -> raw image bytes
    generate_speech(model, text, voice)         -> raw PCM bytes
"""

from typing import Optional, Any, List, Union
from dataclasses import dataclass

from app.config import Settings
from app.core import get_logger
from app.core.exceptions import ConfigurationError

logger = get_logger(__name__, component="gemini_client")


@dataclass
class GenerationConfig:
    """Configuration for content generation"""
    temperature: float = 1.0
    top_p: float = 0.95
    top_k: int = 40
    max_output_tokens: int = 8192
    response_mime_type: Optional[str] = None
    system_instruction: Optional[Any] = None


class UnifiedGeminiClient:
    """
    Unified client that works with both Gemini API and Vertex AI.

    Usage:
        client = UnifiedGeminiClient(settings)

        response = client.models.generate_content(
            model="gemini-2.5-flash",
            contents="Hello!",
            config=GenerationConfig(temperature=0.7)
        )
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.use_vertex_ai = settings.use_vertex_ai
        self.backend = None
        self.models = None

        if self.use_vertex_ai:
            self._init_vertex_ai()
        else:
            self._init_gemini_api()

        logger.info("Gemini client initialized", extra={"backend": settings.backend})

    def _init_gemini_api(self):
        """Initialize Gemini API backend"""
        from google import genai

        api_key = self.settings.gemini_api_key
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY environment variable is required when USE_VERTEX_AI=false")

        self.backend = genai.Client(api_key=api_key)
        self.models = GeminiAPIModels(self.backend)

    def _init_vertex_ai(self):
        """Initialize Vertex AI backend"""
        import vertexai
        from google import genai

        project_id = self.settings.gcp_project_id
        location = self.settings.gcp_location

        if not project_id:
            raise ConfigurationError("GCP_PROJECT_ID environment variable is required when USE_VERTEX_AI=true")

        vertexai.init(project=project_id, location=location)
        self.backend = vertexai
        # Gemini TTS is only reachable through the google-genai SDK, in Vertex mode
        speech_client = genai.Client(vertexai=True, project=project_id, location=location)
        self.models = VertexAIModels(vertexai, location, speech_client)


def _speech_config(voice: str):
    from google.genai import types

    return types.GenerateContentConfig(
        response_modalities=["AUDIO"],
        speech_config=types.SpeechConfig(
            voice_config=types.VoiceConfig(
                prebuilt_voice_config=types.PrebuiltVoiceConfig(
                    voice_name=voice,
                )
            )
        ),
    )


def _extract_inline_audio(response) -> bytes:
    """Pull the inline PCM payload out of a TTS response."""
    candidates = getattr(response, "candidates", None) or []
    for candidate in candidates:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and getattr(inline, "data", None):
                return inline.data
    raise ValueError("TTS response contained no audio data")


class GeminiAPIModels:
    """Gemini API models interface (wraps google-genai)"""

    def __init__(self, client):
        self.client = client

    def generate_content(
        self,
        model: str,
        contents: Union[str, List[Any]],
        config: Optional[GenerationConfig] = None,
    ):
        """
        Generate content using Gemini API.

        Returns:
            Response object with .text property
        """
        from google.genai import types

        config = config or GenerationConfig()

        gen_config_dict = {
            "temperature": config.temperature,
            "top_p": config.top_p,
            "top_k": config.top_k,
            "max_output_tokens": config.max_output_tokens,
        }
        if config.response_mime_type:
            gen_config_dict["response_mime_type"] = config.response_mime_type
        if config.system_instruction:
            gen_config_dict["system_instruction"] = config.system_instruction

        logger.debug("generate_content request", extra={"model": model})
        return self.client.models.generate_content(
            model=model,
            contents=contents,
            config=types.GenerateContentConfig(**gen_config_dict),
        )

    def generate_images(self, model: str, prompt: str, aspect_ratio: str = "16:9") -> bytes:
        """Generate one image and return its encoded bytes (PNG)."""
        from google.genai import types

        logger.debug("generate_images request", extra={"model": model})
        response = self.client.models.generate_images(
            model=model,
            prompt=prompt,
            config=types.GenerateImagesConfig(
                number_of_images=1,
                aspect_ratio=aspect_ratio,
            ),
        )
        generated = getattr(response, "generated_images", None) or []
        if not generated or not generated[0].image or not generated[0].image.image_bytes:
            raise ValueError("Image model returned no images (prompt may have been filtered)")
        return generated[0].image.image_bytes

    def generate_speech(self, model: str, text: str, voice: str) -> bytes:
        """Synthesize narration and return raw 24 kHz 16-bit mono PCM."""
        logger.debug("generate_speech request", extra={"model": model, "voice": voice})
        response = self.client.models.generate_content(
            model=model,
            contents=text,
            config=_speech_config(voice),
        )
        return _extract_inline_audio(response)


class VertexAIModels:
    """Vertex AI models interface (wraps vertexai)"""

    def __init__(self, vertexai_module, location: str, speech_client=None):
        self.vertexai = vertexai_module
        self.location = location
        self.speech_client = speech_client

    def generate_content(
        self,
        model: str,
        contents: Union[str, List[Any]],
        config: Optional[GenerationConfig] = None,
    ):
        """
        Generate content using Vertex AI.

        Returns:
            Response object with .text property
        """
        from vertexai.generative_models import (
            GenerativeModel,
            GenerationConfig as VertexGenerationConfig
        )

        config = config or GenerationConfig()
        model = self._convert_model_name(model)

        model_kwargs = {"model_name": model}
        if config.system_instruction:
            model_kwargs["system_instruction"] = config.system_instruction
        model_instance = GenerativeModel(**model_kwargs)

        gen_config_dict = {
            "temperature": config.temperature,
            "top_p": config.top_p,
            "top_k": config.top_k,
            "max_output_tokens": config.max_output_tokens,
        }
        if config.response_mime_type:
            gen_config_dict["response_mime_type"] = config.response_mime_type

        if isinstance(contents, str):
            contents = [contents]

        logger.debug("generate_content request", extra={"model": model})
        return model_instance.generate_content(
            contents,
            generation_config=VertexGenerationConfig(**gen_config_dict),
        )

    def generate_images(self, model: str, prompt: str, aspect_ratio: str = "16:9") -> bytes:
        """Generate one image with Imagen on Vertex AI and return its bytes."""
        from vertexai.preview.vision_models import ImageGenerationModel

        logger.debug("generate_images request", extra={"model": model})
        image_model = ImageGenerationModel.from_pretrained(model)
        result = image_model.generate_images(
            prompt=prompt,
            number_of_images=1,
            aspect_ratio=aspect_ratio,
        )
        images = getattr(result, "images", None) or []
        if not images:
            raise ValueError("Image model returned no images (prompt may have been filtered)")
        return images[0]._image_bytes

    def generate_speech(self, model: str, text: str, voice: str) -> bytes:
        """Synthesize narration through Gemini TTS in Vertex mode."""
        if self.speech_client is None:
            raise RuntimeError("Vertex AI speech client is not configured")

        logger.debug("generate_speech request", extra={"model": model, "voice": voice})
        response = self.speech_client.models.generate_content(
            model=model,
            contents=text,
            config=_speech_config(voice),
        )
        return _extract_inline_audio(response)

    def _convert_model_name(self, model: str) -> str:
        """
        Convert Gemini API model names to Vertex AI format.

        - gemini-2.0-flash -> gemini-2.0-flash-001
        - gemini-1.5-flash -> gemini-1.5-flash-002
        - gemini-2.5-* names are served unversioned on Vertex AI
        """
        model_mappings = {
            "gemini-2.0-flash": "gemini-2.0-flash-001",
            "gemini-1.5-flash": "gemini-1.5-flash-002",
            "gemini-1.5-pro": "gemini-1.5-pro-002",
        }

        return model_mappings.get(model, model)


def create_client(settings: Settings) -> UnifiedGeminiClient:
    """Create a unified Gemini client for the configured backend."""
    return UnifiedGeminiClient(settings)
