"""
Routes module - contains all API route handlers
"""

from .analysis import router as analysis_router
from .media import router as media_router
from .presets import router as presets_router
from .runs import router as runs_router

__all__ = [
    "analysis_router",
    "media_router",
    "presets_router",
    "runs_router",
]
