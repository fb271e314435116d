"""
Paths configuration

Centralized directory paths for the application.
"""

import os
from pathlib import Path

# Base directories
APP_DIR = Path(__file__).parent.parent
BACKEND_DIR = APP_DIR.parent
PROJECT_DIR = BACKEND_DIR.parent

# Prebuilt single-page front end (vite build output)
STATIC_DIR = Path(os.getenv("STATIC_DIR") or PROJECT_DIR / "dist")


__all__ = ["APP_DIR", "BACKEND_DIR", "PROJECT_DIR", "STATIC_DIR"]
