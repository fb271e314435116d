"""
Per-scene media routes

Direct, single-scene counterparts of a generation run. Used by the front end
when it drives the pipeline itself and by the command-line driver.
"""

from fastapi import APIRouter, Depends

from ..models import (
    GenerateImageRequest,
    GenerateImageResponse,
    GenerateSpeechRequest,
    GenerateSpeechResponse,
)
from ..services.container import ServiceContainer
from .dependencies import get_ready_container

router = APIRouter(prefix="/api", tags=["media"])


@router.post("/generate-image", response_model=GenerateImageResponse)
async def generate_image(
    request: GenerateImageRequest,
    container: ServiceContainer = Depends(get_ready_container),
):
    image_url = await container.image_generator.generate(request.scene, request.prompt_suffix)
    return GenerateImageResponse(image_url=image_url)


@router.post("/generate-speech", response_model=GenerateSpeechResponse)
async def generate_speech(
    request: GenerateSpeechRequest,
    container: ServiceContainer = Depends(get_ready_container),
):
    audio_url = await container.speech_generator.generate(request.scene, request.voice)
    return GenerateSpeechResponse(audio_url=audio_url)
