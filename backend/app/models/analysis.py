"""
API schemas for script analysis endpoints

Request/Response models for splitting a script into scenes and for preset
detection. Field names follow the front end's camelCase wire format.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeScriptRequest(BaseModel):
    """Request to split a script into timed scenes"""
    model_config = ConfigDict(populate_by_name=True)

    script: str
    # Max seconds of narration per scene; defaults to the detected preset's timing
    timing_rule: Optional[float] = Field(default=None, alias="timingRule")


class AnalyzeScriptResponse(BaseModel):
    scenes: List[str]


class DetectPresetRequest(BaseModel):
    script: str
    current: Optional[str] = None


class DetectPresetResponse(BaseModel):
    preset: str
    details: Dict[str, Any]


class ScenesResponse(BaseModel):
    scenes: List[str]
    generation: int
