"""
Command-line driver for a running Creator Station server.

Reproduces the browser workflow: detect the preset from the script, have the
server split it into scenes, then generate every scene's image and narration
one scene at a time, printing progress and the estimated cost.

Usage:
    python -m app.cli script.txt --base-url http://localhost:8080 --out ./assets
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

from app.clients import CreatorStationClient, DEFAULT_BASE_URL
from app.config import detect_preset, get_preset
from app.config.settings import DEFAULT_REMOTE_CALL_TIMEOUT_SECONDS, DEFAULT_SCENE_PACE_SECONDS
from app.core import extension_for_mime, parse_data_uri, setup_logging
from app.core.exceptions import CreatorStationError
from app.models.status import RunStatus
from app.services.orchestration import AssetOrchestrator, GenerationRun, SceneStore, cost_breakdown


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="creator-station",
        description="Split a script into scenes and generate an image and narration per scene.",
    )
    parser.add_argument("script_file", help="Path to a UTF-8 text file with the script")
    parser.add_argument("--base-url", default=os.getenv("CREATOR_STATION_URL", DEFAULT_BASE_URL),
                        help="Server base URL")
    parser.add_argument("--preset", default=None, help="Preset key (default: detected from the script)")
    parser.add_argument("--timing", type=float, default=None,
                        help="Max seconds per scene (default: the preset's timing)")
    parser.add_argument("--out", default=None, help="Directory to write decoded assets into")
    parser.add_argument("--pace", type=float, default=DEFAULT_SCENE_PACE_SECONDS,
                        help="Seconds to wait between scenes")
    parser.add_argument("--timeout", type=float, default=DEFAULT_REMOTE_CALL_TIMEOUT_SECONDS,
                        help="Per-request timeout in seconds")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING"))
    return parser


def _print_progress(run: GenerationRun) -> None:
    print(f"  [{run.progress:5.1f}%] scene {run.cursor}/{run.total_scenes}")


def write_assets(store: SceneStore, out_dir: Path) -> List[Path]:
    """Decode every successful asset to ``out_dir``; also writes a manifest."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    manifest = []
    assets = store.assets

    for index, scene in enumerate(store.scenes):
        result = assets.get(index)
        entry = {"index": index, "scene": scene, "image": None, "audio": None}
        if result is not None:
            for slot, ok in (("image", result.image_ok), ("audio", result.audio_ok)):
                if not ok:
                    entry[slot] = getattr(result, slot)
                    continue
                mime, data = parse_data_uri(getattr(result, slot))
                path = out_dir / f"scene_{index + 1:03d}_{slot}{extension_for_mime(mime)}"
                path.write_bytes(data)
                written.append(path)
                entry[slot] = path.name
        manifest.append(entry)

    manifest_path = out_dir / "manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False), encoding="utf-8")
    written.append(manifest_path)
    return written


async def run_pipeline(args: argparse.Namespace, client: Optional[CreatorStationClient] = None) -> int:
    script = Path(args.script_file).read_text(encoding="utf-8")
    preset = get_preset(args.preset or detect_preset(script))
    timing = args.timing if args.timing is not None else preset.timing

    client = client or CreatorStationClient(args.base_url, timeout=args.timeout)
    async with client:
        health = await client.health()
        print(f"Server {health.get('version', '?')} ({health.get('backend', 'unknown')} backend)")
        print(f"Preset: {preset.name} ({preset.timing}s per scene, voice {preset.voice})")
        scenes = await client.analyze_script(script, timing)
        print(f"Script split into {len(scenes)} scenes")

        store = SceneStore()
        store.replace(scenes, preset.key)
        orchestrator = AssetOrchestrator(
            store,
            client.image_service,
            client.speech_service,
            pace_seconds=args.pace,
            call_timeout_seconds=args.timeout,
            on_progress=_print_progress,
        )
        run = await orchestrator.run_to_completion(preset.key)

    failed = [
        index for index, result in sorted(store.assets.items())
        if not (result.image_ok and result.audio_ok)
    ]
    cost = cost_breakdown(store.assets, store.scenes)
    print(f"Run {run.status.value}: {len(store.assets)} scenes, {len(failed)} with errors")
    if failed:
        print(f"  Scenes with errors: {', '.join(str(i + 1) for i in failed)}")
    print(f"Estimated cost: ${cost['total']:.4f} ({cost['images']} images, {cost['characters']} characters)")

    if args.out:
        written = write_assets(store, Path(args.out))
        print(f"Wrote {len(written)} files to {args.out}")

    return 0 if run.status is RunStatus.COMPLETE else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)

    try:
        return asyncio.run(run_pipeline(args))
    except (CreatorStationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
