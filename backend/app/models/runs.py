"""
API schemas for generation runs, assets and cost
"""

from typing import Dict, List, Optional

from pydantic import BaseModel


class StartRunRequest(BaseModel):
    """Start a generation run over the current scenes"""
    preset: Optional[str] = None  # defaults to the preset detected at analysis time


class AssetResultModel(BaseModel):
    image: Optional[str] = None  # data URI, "error", or absent
    audio: Optional[str] = None


class CostBreakdown(BaseModel):
    images: int
    characters: int
    image_cost: float
    audio_cost: float
    total: float


class RunResponse(BaseModel):
    """Snapshot of a generation run"""
    id: str
    generation: int
    status: str
    preset: str
    cursor: int
    total_scenes: int
    progress: float
    error: Optional[str] = None
    started_at: str
    finished_at: Optional[str] = None


class RunDetailResponse(RunResponse):
    assets: Dict[int, AssetResultModel]
    cost: CostBreakdown


class AssetsResponse(BaseModel):
    generation: int
    assets: Dict[int, AssetResultModel]


class CancelResponse(BaseModel):
    cancelled: bool


class PresetListResponse(BaseModel):
    default: str
    presets: List[dict]
    voices: List[dict]
