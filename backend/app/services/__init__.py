"""
Services package - Core business logic and integrations

Organized by domain responsibility:

Content:
    - content: Script analysis (script -> scenes)

Media:
    - media: Per-scene image and narration generation

Orchestration:
    - orchestration: Scene store, generation runs, cost estimation

Infrastructure (Technical Concerns):
    - infrastructure/llm: Unified Gemini API / Vertex AI client
    - infrastructure/parsing: JSON recovery for model responses

Wiring:
    - container: Builds every service once from Settings
"""

from .content import ScriptAnalyzer
from .media import ImageGenerator, SpeechGenerator
from .orchestration import AssetOrchestrator, SceneStore
from .container import ServiceContainer, build_container, build_unready_container, wire_services

__all__ = [
    "ScriptAnalyzer",
    "ImageGenerator",
    "SpeechGenerator",
    "AssetOrchestrator",
    "SceneStore",
    "ServiceContainer",
    "build_container",
    "build_unready_container",
    "wire_services",
]
