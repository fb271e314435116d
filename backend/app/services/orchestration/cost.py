"""
Cost estimation for a generation run.

Pricing is a flat estimate: a fixed amount per scene with a recorded image
result (failed attempts included) plus a per-character narration rate over
the whole scene list.
"""

from typing import Any, Dict, Iterable, Mapping

from app.config import AUDIO_COST_PER_CHAR, IMAGE_UNIT_COST


def _image_value(entry: Any):
    if isinstance(entry, Mapping):
        return entry.get("image")
    return getattr(entry, "image", None)


def count_recorded_images(asset_map: Mapping[int, Any]) -> int:
    count = 0
    for entry in asset_map.values():
        image = _image_value(entry)
        if image is not None:
            count += 1
    return count


def count_characters(scenes: Iterable[str]) -> int:
    return sum(len(scene) for scene in scenes)


def estimate_cost(asset_map: Mapping[int, Any], scenes: Iterable[str]) -> float:
    """Estimated spend in USD; 0 for an empty map and scene list."""
    return (
        count_recorded_images(asset_map) * IMAGE_UNIT_COST
        + count_characters(scenes) * AUDIO_COST_PER_CHAR
    )


def cost_breakdown(asset_map: Mapping[int, Any], scenes: Iterable[str]) -> Dict[str, Any]:
    """Cost summary for the API, rounded to 4 decimal places."""
    scenes = list(scenes)
    images = count_recorded_images(asset_map)
    characters = count_characters(scenes)
    image_cost = images * IMAGE_UNIT_COST
    audio_cost = characters * AUDIO_COST_PER_CHAR
    return {
        "images": images,
        "characters": characters,
        "image_cost": round(image_cost, 4),
        "audio_cost": round(audio_cost, 4),
        "total": round(image_cost + audio_cost, 4),
    }
