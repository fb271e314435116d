"""
Script analysis routes
"""

from fastapi import APIRouter, Depends

from ..config import detect_preset, get_preset
from ..core import get_logger
from ..core.exceptions import ValidationError
from ..models import AnalyzeScriptRequest, AnalyzeScriptResponse, ScenesResponse
from ..services.container import ServiceContainer
from .dependencies import get_container, get_ready_container

router = APIRouter(prefix="/api", tags=["analysis"])

logger = get_logger(__name__, component="analysis_routes")


@router.post("/analyze-script", response_model=AnalyzeScriptResponse)
async def analyze_script(
    request: AnalyzeScriptRequest,
    container: ServiceContainer = Depends(get_ready_container),
):
    """Split a script into scenes and make them the current scene list.

    A successful analysis clears the asset map and supersedes any run still
    working on the previous scenes.
    """
    if not request.script or not request.script.strip():
        raise ValidationError("script is required")

    preset_key = detect_preset(request.script, container.store.preset_key)
    timing = request.timing_rule if request.timing_rule is not None else get_preset(preset_key).timing

    scenes = await container.analyzer.analyze(request.script, timing)

    generation = container.store.replace(scenes, preset_key)
    if container.orchestrator.supersede_active_run():
        logger.info("Active run superseded by new analysis", extra={"generation": generation})

    return AnalyzeScriptResponse(scenes=scenes)


@router.get("/scenes", response_model=ScenesResponse)
async def get_scenes(container: ServiceContainer = Depends(get_container)):
    """Current scene list and its generation number"""
    store = container.store
    return ScenesResponse(scenes=store.scenes, generation=store.generation)
