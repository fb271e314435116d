"""
Pydantic models for API request/response schemas
"""

from .analysis import (
    AnalyzeScriptRequest,
    AnalyzeScriptResponse,
    DetectPresetRequest,
    DetectPresetResponse,
    ScenesResponse,
)
from .generation import (
    GenerateImageRequest,
    GenerateImageResponse,
    GenerateSpeechRequest,
    GenerateSpeechResponse,
)
from .runs import (
    StartRunRequest,
    AssetResultModel,
    CostBreakdown,
    RunResponse,
    RunDetailResponse,
    AssetsResponse,
    CancelResponse,
    PresetListResponse,
)
from .status import RunStatus

__all__ = [
    "AnalyzeScriptRequest",
    "AnalyzeScriptResponse",
    "DetectPresetRequest",
    "DetectPresetResponse",
    "ScenesResponse",
    "GenerateImageRequest",
    "GenerateImageResponse",
    "GenerateSpeechRequest",
    "GenerateSpeechResponse",
    "StartRunRequest",
    "AssetResultModel",
    "CostBreakdown",
    "RunResponse",
    "RunDetailResponse",
    "AssetsResponse",
    "CancelResponse",
    "PresetListResponse",
    "RunStatus",
]
