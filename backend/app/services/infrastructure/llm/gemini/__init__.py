"""
Gemini AI Service Module

Provides the Gemini API / Vertex AI client shared by all remote calls.

Usage:
    from app.services.infrastructure.llm.gemini import create_client, GenerationConfig
"""

from .client import (
    UnifiedGeminiClient,
    GeminiAPIModels,
    VertexAIModels,
    GenerationConfig,
    create_client,
)

__all__ = [
    "UnifiedGeminiClient",
    "GeminiAPIModels",
    "VertexAIModels",
    "GenerationConfig",
    "create_client",
]
