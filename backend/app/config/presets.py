"""
Style presets

A preset bundles the image style suffix, the maximum narration length per
scene and the narration voice applied uniformly to a generation run. Presets
can be picked explicitly or detected from keywords in the pasted script.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from app.core.exceptions import ValidationError


@dataclass(frozen=True)
class Preset:
    key: str
    name: str
    suffix: str
    timing: int  # max seconds of narration per scene
    voice: str   # voice label, resolved through app.core.voice_catalog
    keywords: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "suffix": self.suffix,
            "timing": self.timing,
            "voice": self.voice,
            "keywords": list(self.keywords),
        }


PRESETS: Dict[str, Preset] = {
    "digital-futurism": Preset(
        key="digital-futurism",
        name="Digital Futurism",
        suffix=(
            ", minimalist hand-drawn black ink sketch, bright ORANGE SCARF (#FF6B35), "
            "PURE BLACK VOID (#000000), high contrast, editorial illustration."
        ),
        timing=13,
        voice="Deep Male (Fenrir)",
        keywords=("dopamine", "focus"),
    ),
    "productivity-sketch": Preset(
        key="productivity-sketch",
        name="Productivity Sketch",
        suffix=(
            ", rough pencil sketch on CRUMPLED GRAPH PAPER (#FFFFFF), Graphite Black ink (#333333), "
            "Highlighter YELLOW (#FAFF00) accents, messy lines."
        ),
        timing=8,
        voice="Fast/Crisp Male (Puck)",
        keywords=("productivity", "system"),
    ),
    "bible-stories": Preset(
        key="bible-stories",
        name="Bible Stories",
        suffix=(
            ", biblical era oil painting, golden light, ancient robes, desert landscape, "
            "cinematic 8k, dramatic lighting."
        ),
        timing=13,
        voice="Calm Female (Zephyr)",
        keywords=("god", "jesus"),
    ),
}

DEFAULT_PRESET = "digital-futurism"


def get_preset(key: Optional[str] = None) -> Preset:
    """Look up a preset by key; ``None`` returns the default preset."""
    if key is None:
        return PRESETS[DEFAULT_PRESET]
    preset = PRESETS.get(key)
    if preset is None:
        raise ValidationError(
            f"Unknown preset '{key}'. Available: {', '.join(PRESETS)}"
        )
    return preset


def detect_preset(script: str, current: str = DEFAULT_PRESET) -> str:
    """Pick a preset from keywords in the script.

    Presets are checked in declaration order and the first keyword hit wins.
    A script without any trigger keyword keeps ``current``.
    """
    lowered = (script or "").lower()
    for key, preset in PRESETS.items():
        if any(keyword in lowered for keyword in preset.keywords):
            return key
    return current


def list_presets() -> List[Dict[str, Any]]:
    return [preset.to_dict() for preset in PRESETS.values()]


__all__ = [
    "Preset",
    "PRESETS",
    "DEFAULT_PRESET",
    "get_preset",
    "detect_preset",
    "list_presets",
]
