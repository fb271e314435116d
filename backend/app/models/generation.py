"""
API schemas for per-scene media generation endpoints
"""

from pydantic import BaseModel, ConfigDict, Field


class GenerateImageRequest(BaseModel):
    """Request to render one scene as an image"""
    model_config = ConfigDict(populate_by_name=True)

    scene: str
    prompt_suffix: str = Field(alias="promptSuffix")


class GenerateImageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(alias="imageUrl")  # data URI


class GenerateSpeechRequest(BaseModel):
    """Request to narrate one scene"""
    scene: str
    voice: str  # voice label, e.g. "Deep Male (Fenrir)"


class GenerateSpeechResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    audio_url: str = Field(alias="audioUrl")  # data URI
