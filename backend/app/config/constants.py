"""
Constants configuration

API settings, CORS configuration and cost constants.
"""

import os

# API settings
API_TITLE = "Creator Station API"
API_DESCRIPTION = "Split video scripts into scenes and generate per-scene images and narration"
API_VERSION = "1.0.0"

# CORS origins
_DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8080",
]
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", ",".join(_DEFAULT_CORS_ORIGINS)).split(",")
    if origin.strip()
]

# Server
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

# Cost estimation (USD)
IMAGE_UNIT_COST = 0.04          # per generated image
AUDIO_COST_PER_CHAR = 0.000016  # per narrated character

# Sentinel recorded for an attempted-but-failed asset slot
ASSET_ERROR = "error"

__all__ = [
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "IMAGE_UNIT_COST",
    "AUDIO_COST_PER_CHAR",
    "ASSET_ERROR",
]
