"""
Generation run routes

Server-driven pipeline: one run at a time over the current scene list,
observable by polling while it progresses.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ..core.exceptions import RunNotFoundError
from ..models import (
    AssetsResponse,
    CancelResponse,
    CostBreakdown,
    RunDetailResponse,
    RunResponse,
    StartRunRequest,
)
from ..services.container import ServiceContainer
from ..services.orchestration import cost_breakdown
from .dependencies import get_container, get_ready_container

router = APIRouter(prefix="/api", tags=["runs"])


@router.post("/runs", response_model=RunResponse, status_code=202)
async def start_run(
    request: Optional[StartRunRequest] = None,
    container: ServiceContainer = Depends(get_ready_container),
):
    """Start generating images and narration for every current scene.

    409 when a run is already in progress or there are no scenes.
    """
    preset_key = request.preset if request else None
    run = container.orchestrator.start_run(preset_key)
    return RunResponse(**run.to_dict())


@router.get("/runs/current", response_model=RunDetailResponse)
async def get_current_run(container: ServiceContainer = Depends(get_container)):
    """Latest run with its asset map and running cost estimate"""
    snapshot = container.orchestrator.snapshot() if container.orchestrator else None
    if snapshot is None:
        raise RunNotFoundError("No generation run has been started")
    return RunDetailResponse(**snapshot)


@router.post("/runs/current/cancel", response_model=CancelResponse)
async def cancel_current_run(container: ServiceContainer = Depends(get_container)):
    cancelled = container.orchestrator.cancel() if container.orchestrator else False
    return CancelResponse(cancelled=cancelled)


@router.get("/assets", response_model=AssetsResponse)
async def get_assets(container: ServiceContainer = Depends(get_container)):
    store = container.store
    return AssetsResponse(generation=store.generation, assets=store.asset_dict())


@router.get("/cost", response_model=CostBreakdown)
async def get_cost(container: ServiceContainer = Depends(get_container)):
    store = container.store
    return CostBreakdown(**cost_breakdown(store.assets, store.scenes))
