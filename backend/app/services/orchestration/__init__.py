"""Generation orchestration - scene store, runs and cost estimation."""

from .scene_store import AssetResult, SceneStore
from .asset_orchestrator import AssetOrchestrator, GenerationRun
from .cost import cost_breakdown, estimate_cost

__all__ = [
    "AssetResult",
    "SceneStore",
    "AssetOrchestrator",
    "GenerationRun",
    "cost_breakdown",
    "estimate_cost",
]
