"""Content analysis - script to scene splitting."""

from .script_analyzer import ScriptAnalyzer, clean_scene_text, extract_scenes

__all__ = ["ScriptAnalyzer", "clean_scene_text", "extract_scenes"]
