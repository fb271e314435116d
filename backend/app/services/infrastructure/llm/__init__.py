"""LLM infrastructure - unified Gemini / Vertex AI client."""

from .gemini import UnifiedGeminiClient, GenerationConfig, create_client

__all__ = ["UnifiedGeminiClient", "GenerationConfig", "create_client"]
