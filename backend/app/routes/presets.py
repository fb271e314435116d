"""
Preset routes
"""

from fastapi import APIRouter

from ..config import DEFAULT_PRESET, detect_preset, get_preset, list_presets
from ..core import list_voice_presets
from ..models import DetectPresetRequest, DetectPresetResponse, PresetListResponse

router = APIRouter(prefix="/api/presets", tags=["presets"])


@router.get("", response_model=PresetListResponse)
async def get_presets():
    """All style presets, the default key and the narration voices they use"""
    return PresetListResponse(default=DEFAULT_PRESET, presets=list_presets(), voices=list_voice_presets())


@router.post("/detect", response_model=DetectPresetResponse)
async def detect(request: DetectPresetRequest):
    """Pick a preset from keywords in the script; no match keeps ``current``."""
    current = get_preset(request.current).key if request.current else DEFAULT_PRESET
    key = detect_preset(request.script, current)
    return DetectPresetResponse(preset=key, details=get_preset(key).to_dict())
