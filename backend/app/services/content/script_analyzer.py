"""
Script Analyzer - splits a video script into timed scenes with a text model

The model is asked for a JSON array of plain narration strings, each short
enough to be read aloud within the preset's timing rule. The response is
defensively unwrapped (code fences, stray markdown) before use.
"""

import asyncio
import re
from typing import Any, List

from app.core import get_logger, LogTimer
from app.core.exceptions import AnalysisFailed, ValidationError
from app.services.infrastructure.llm import GenerationConfig
from app.services.infrastructure.parsing import parse_json_payload

logger = get_logger(__name__, component="script_analyzer")

SYSTEM_INSTRUCTION = (
    "You are a video editor preparing a narrated short. You split scripts into "
    "scenes; each scene is narrated over a single still image."
)

PROMPT_TEMPLATE = """Split the following video script into sequential scenes.

Rules:
- Each scene must take at most {max_seconds} seconds to read aloud at a natural pace
  (roughly {max_words} words).
- Keep the original wording and order; do not summarize, skip or add content.
- Split on sentence boundaries where possible.
- Return ONLY a JSON array of strings, one string per scene.
- Scene strings are plain text: no markdown, no numbering, no "Scene 1:" labels.

SCRIPT:
\"\"\"
{script}
\"\"\"
"""

# Average narration speed used to translate the timing rule into a word budget
WORDS_PER_SECOND = 2.5

_MARKDOWN_PREFIX_RE = re.compile(r"^\s*(?:#{1,6}\s+|[-*•]\s+|\d+[.)]\s+)")
_SCENE_LABEL_RE = re.compile(r"^\s*scene\s*\d+\s*[:.\-]\s*", re.IGNORECASE)
_EMPHASIS_RE = re.compile(r"(\*\*|__|\*|`)")


def clean_scene_text(text: str) -> str:
    """Strip residual formatting markers from a single scene string."""
    cleaned = str(text).strip()
    cleaned = _MARKDOWN_PREFIX_RE.sub("", cleaned)
    cleaned = _SCENE_LABEL_RE.sub("", cleaned)
    cleaned = _EMPHASIS_RE.sub("", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    # Wrapping quotes only; a quote that recurs inside is dialogue
    quote = cleaned[:1]
    if len(cleaned) >= 2 and quote in ("\"", "'") and cleaned[-1] == quote and quote not in cleaned[1:-1]:
        cleaned = cleaned[1:-1].strip()
    return cleaned


def extract_scenes(payload: Any) -> List[str]:
    """Accept either a bare JSON array or an object with a ``scenes`` array."""
    if isinstance(payload, dict):
        payload = payload.get("scenes")
    if not isinstance(payload, list):
        raise ValueError("Expected a JSON array of scene strings")

    scenes: List[str] = []
    for item in payload:
        if isinstance(item, dict):
            item = item.get("text") or item.get("narration") or item.get("scene") or ""
        if not isinstance(item, (str, int, float)):
            continue
        scene = clean_scene_text(item)
        if scene:
            scenes.append(scene)
    return scenes


class ScriptAnalyzer:
    """Remote content service client: script -> ordered scene strings"""

    def __init__(self, client, model: str, timeout_seconds: float = 120.0):
        self.client = client
        self.model = model
        self.timeout_seconds = timeout_seconds

    def build_prompt(self, script: str, max_scene_seconds: float) -> str:
        max_seconds = int(max_scene_seconds) if float(max_scene_seconds).is_integer() else max_scene_seconds
        return PROMPT_TEMPLATE.format(
            max_seconds=max_seconds,
            max_words=max(1, int(max_scene_seconds * WORDS_PER_SECOND)),
            script=script.strip(),
        )

    async def analyze(self, script: str, max_scene_seconds: float) -> List[str]:
        """Split ``script`` into scenes of at most ``max_scene_seconds`` each.

        Raises:
            ValidationError: blank script or non-positive timing rule.
            AnalysisFailed: any transport, timeout or payload failure.
        """
        if not script or not script.strip():
            raise ValidationError("script is required")
        if max_scene_seconds is None or max_scene_seconds <= 0:
            raise ValidationError("timingRule must be a positive number of seconds")

        config = GenerationConfig(
            temperature=0.3,
            response_mime_type="application/json",
            system_instruction=SYSTEM_INSTRUCTION,
        )
        prompt = self.build_prompt(script, max_scene_seconds)

        try:
            with LogTimer(logger, f"script analysis ({len(script)} chars)"):
                response = await asyncio.wait_for(
                    asyncio.to_thread(
                        self.client.models.generate_content,
                        model=self.model,
                        contents=prompt,
                        config=config,
                    ),
                    timeout=self.timeout_seconds,
                )
            text = getattr(response, "text", None)
            if not text:
                raise ValueError("Empty response from text model")
            scenes = extract_scenes(parse_json_payload(text))
        except Exception as e:
            logger.error("Script analysis failed", extra={"error": repr(e)})
            raise AnalysisFailed(detail=repr(e)) from e

        if not scenes:
            logger.error("Script analysis returned no scenes")
            raise AnalysisFailed(detail="no scenes in response")

        logger.info(f"Script split into {len(scenes)} scenes", extra={"scene_count": len(scenes)})
        return scenes
