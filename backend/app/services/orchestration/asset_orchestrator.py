"""
Asset Orchestrator - sequential, paced per-scene image + narration generation

A generation run walks the scene snapshot in order. For each scene the image
and narration calls are issued together and both are awaited before the
next scene starts. A failure (or timeout) of one modality is recorded as
ASSET_ERROR for that slot only; the other slot and the rest of the run are
unaffected. After each scene the result is merged into the Scene Store and
progress is reported, then the run waits ``pace_seconds`` before the next
scene.

At most one run is active at a time. A run stops before its next step when
it is cancelled or when a new analysis has replaced the scene list.
"""

import asyncio
import inspect
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from app.config import ASSET_ERROR, Preset, get_preset
from app.core import get_logger, set_run_id
from app.core.exceptions import NoScenesError, RunInProgressError
from app.models.status import RunStatus

from .cost import cost_breakdown
from .scene_store import AssetResult, SceneStore

logger = get_logger(__name__, component="asset_orchestrator")

ProgressListener = Callable[["GenerationRun"], Any]


@dataclass
class GenerationRun:
    generation: int
    scenes: List[str]
    preset: Preset
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    cursor: int = 0
    progress: float = 0.0
    status: RunStatus = RunStatus.RUNNING
    error: Optional[str] = None
    started_at: str = field(default_factory=lambda: datetime.now().isoformat())
    finished_at: Optional[str] = None
    cancel_event: asyncio.Event = field(default_factory=asyncio.Event, repr=False)
    task: Optional[asyncio.Task] = field(default=None, repr=False)

    @property
    def total_scenes(self) -> int:
        return len(self.scenes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "generation": self.generation,
            "status": self.status.value,
            "preset": self.preset.key,
            "cursor": self.cursor,
            "total_scenes": self.total_scenes,
            "progress": self.progress,
            "error": self.error,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
        }


class AssetOrchestrator:
    """Drives generation runs over the Scene Store.

    ``image_service`` needs ``async generate(scene, style_suffix) -> str`` and
    ``speech_service`` needs ``async generate(scene, voice_label) -> str``.
    """

    def __init__(
        self,
        store: SceneStore,
        image_service,
        speech_service,
        pace_seconds: float = 1.0,
        call_timeout_seconds: float = 120.0,
        on_progress: Optional[ProgressListener] = None,
    ):
        self.store = store
        self.image_service = image_service
        self.speech_service = speech_service
        self.pace_seconds = pace_seconds
        self.call_timeout_seconds = call_timeout_seconds
        self.on_progress = on_progress
        self._current: Optional[GenerationRun] = None

    @property
    def current_run(self) -> Optional[GenerationRun]:
        return self._current

    @property
    def is_running(self) -> bool:
        return self._current is not None and self._current.status.is_in_progress()

    def _create_run(self, preset_key: Optional[str] = None) -> GenerationRun:
        if self.is_running:
            raise RunInProgressError("A generation run is already in progress")
        if self.store.is_empty():
            raise NoScenesError("No scenes to generate; analyze a script first")

        preset = get_preset(preset_key or self.store.preset_key)
        run = GenerationRun(
            generation=self.store.generation,
            scenes=self.store.scenes,
            preset=preset,
        )
        self._current = run
        logger.info(
            "Generation run created",
            extra={"run_id": run.id, "generation": run.generation, "scene_count": run.total_scenes, "preset": preset.key},
        )
        return run

    def start_run(self, preset_key: Optional[str] = None) -> GenerationRun:
        """Create a run and schedule it on the running event loop."""
        run = self._create_run(preset_key)
        run.task = asyncio.create_task(self.execute(run), name=f"generation-run-{run.id[:8]}")
        return run

    async def run_to_completion(self, preset_key: Optional[str] = None) -> GenerationRun:
        """Create a run and await it inline."""
        run = self._create_run(preset_key)
        await self.execute(run)
        return run

    def cancel(self) -> bool:
        """Ask the active run to stop before its next step."""
        if not self.is_running:
            return False
        logger.info("Cancellation requested", extra={"run_id": self._current.id})
        self._current.cancel_event.set()
        return True

    def supersede_active_run(self) -> bool:
        """Retire a run whose scene list has been replaced.

        The run stops holding the single-run guard immediately and its
        in-flight provider calls are cancelled, so a run over the new scene
        list can start without waiting for them to time out.
        """
        run = self._current
        if run is None or not run.status.is_in_progress() or run.generation == self.store.generation:
            return False
        run.status = RunStatus.SUPERSEDED
        run.cancel_event.set()
        if run.task is not None and not run.task.done():
            run.task.cancel()
        logger.info("Run superseded by a newer scene list", extra={"run_id": run.id, "generation": run.generation})
        return True

    async def shutdown(self) -> None:
        """Stop the active run, if any, and wait for it to unwind."""
        run = self._current
        if run is None or run.task is None or run.task.done():
            return
        run.cancel_event.set()
        run.task.cancel()
        try:
            await run.task
        except asyncio.CancelledError:
            pass

    def snapshot(self) -> Optional[Dict[str, Any]]:
        """Current run plus the asset map and running cost estimate."""
        run = self._current
        if run is None:
            return None
        data = run.to_dict()
        assets = self.store.assets if run.generation == self.store.generation else {}
        data["assets"] = {index: result.to_dict() for index, result in sorted(assets.items())}
        data["cost"] = cost_breakdown(assets, run.scenes)
        return data

    async def execute(self, run: GenerationRun) -> GenerationRun:
        set_run_id(run.id)
        total = run.total_scenes
        logger.info("Generation run started", extra={"scene_count": total, "preset": run.preset.key})

        try:
            for index, scene in enumerate(run.scenes):
                if self._should_stop(run):
                    break

                result = await self._generate_scene(run, index, scene)

                if not self.store.merge_asset(run.generation, index, result):
                    run.status = RunStatus.SUPERSEDED
                    break

                run.cursor = index + 1
                run.progress = (index + 1) * 100 / total
                await self._notify(run)

                if index < total - 1:
                    await self._pace(run)
            else:
                run.status = RunStatus.COMPLETE
        except asyncio.CancelledError:
            if run.generation != self.store.generation:
                run.status = RunStatus.SUPERSEDED
            else:
                run.status = RunStatus.CANCELLED
            raise
        except Exception as e:
            run.status = RunStatus.FAILED
            run.error = str(e)
            logger.error("Generation run failed", extra={"error": repr(e)}, exc_info=True)
        finally:
            run.finished_at = datetime.now().isoformat()
            logger.info(
                "Generation run finished",
                extra={"status": run.status.value, "settled": run.cursor, "scene_count": total},
            )
            set_run_id(None)

        return run

    def _should_stop(self, run: GenerationRun) -> bool:
        if run.generation != self.store.generation:
            run.status = RunStatus.SUPERSEDED
            logger.info("Run superseded by a newer scene list", extra={"generation": run.generation})
            return True
        if run.cancel_event.is_set():
            run.status = RunStatus.CANCELLED
            logger.info("Run cancelled", extra={"cursor": run.cursor})
            return True
        return False

    async def _generate_scene(self, run: GenerationRun, index: int, scene: str) -> AssetResult:
        # Both requests are in flight before either is awaited
        image_task = asyncio.create_task(
            self._bounded(self.image_service.generate(scene, run.preset.suffix))
        )
        audio_task = asyncio.create_task(
            self._bounded(self.speech_service.generate(scene, run.preset.voice))
        )
        image, audio = await asyncio.gather(image_task, audio_task, return_exceptions=True)

        result = AssetResult(
            image=self._settle("image", index, image),
            audio=self._settle("audio", index, audio),
        )
        logger.info(
            f"Scene {index + 1}/{run.total_scenes} settled",
            extra={"scene_index": index, "image_ok": result.image_ok, "audio_ok": result.audio_ok},
        )
        return result

    async def _bounded(self, coro):
        return await asyncio.wait_for(coro, timeout=self.call_timeout_seconds)

    @staticmethod
    def _settle(modality: str, index: int, outcome: Any) -> str:
        if isinstance(outcome, BaseException):
            if isinstance(outcome, asyncio.TimeoutError):
                detail = "timed out"
            else:
                detail = getattr(outcome, "detail", "") or repr(outcome)
            logger.warning(
                f"{modality} generation failed for scene {index + 1}",
                extra={"scene_index": index, "modality": modality, "error": detail},
            )
            return ASSET_ERROR
        if not outcome:
            logger.warning(
                f"{modality} generation returned nothing for scene {index + 1}",
                extra={"scene_index": index, "modality": modality},
            )
            return ASSET_ERROR
        return outcome

    async def _pace(self, run: GenerationRun) -> None:
        """Wait between scenes; returns early only when the run is woken."""
        if self.pace_seconds <= 0:
            await asyncio.sleep(0)
            return
        try:
            await asyncio.wait_for(run.cancel_event.wait(), timeout=self.pace_seconds)
        except asyncio.TimeoutError:
            pass

    async def _notify(self, run: GenerationRun) -> None:
        if self.on_progress is None:
            return
        try:
            outcome = self.on_progress(run)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            logger.warning("Progress listener raised", extra={"error": repr(e)})
