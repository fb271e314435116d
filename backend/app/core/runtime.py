"""
Runtime environment guards and env parsing helpers.
"""

import os
from pathlib import Path
from typing import Dict, Optional


def parse_bool_env(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_float_env(name: str, default: float, minimum: Optional[float] = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    if minimum is not None:
        value = max(value, minimum)
    return value


def static_site_report(static_dir: Path) -> Dict[str, object]:
    """Describe whether the prebuilt front end is available for serving."""
    index_file = static_dir / "index.html"
    return {
        "path": str(static_dir),
        "exists": static_dir.is_dir(),
        "has_index": index_file.is_file(),
    }
