"""Batch driver — skip, detect, select, generate, resolve, one video at a time."""

from __future__ import annotations

from pathlib import Path

from ensub.core.config import EnsubConfig
from ensub.core.detection import detect_language
from ensub.core.events import EventCallback, PipelineEvent
from ensub.core.generation import generate_subtitles
from ensub.core.models import BatchCounters, GenerationOutcome, VideoFile
from ensub.core.recognizer import Recognizer
from ensub.core.selection import select_plan
from ensub.utils.console import console


def process_video(
    video: VideoFile,
    recognizer: Recognizer,
    scratch_dir: Path,
    counters: BatchCounters,
    emit: EventCallback | None = None,
) -> GenerationOutcome | None:
    """Process one video and update ``counters``.

    Args:
        video: The video to subtitle.
        recognizer: Configured recognition invoker.
        scratch_dir: Existing directory for detection byproducts.
        counters: Running batch totals, updated in place.
        emit: Optional callback for progress events.

    Returns:
        The generation outcome, or None if the video was skipped.
    """

    def _emit(stage: str, message: str, data: dict | None = None) -> None:
        if emit:
            emit(PipelineEvent(stage=stage, progress=0.0, message=message, data=data))

    final_path = video.final_subtitle_path
    if final_path.exists():
        console.print(f"[dim]Subtitle exists, skipping:[/dim] {final_path}")
        counters.skipped += 1
        _emit("skip", f"Skipped {video.path.name}", {"video": str(video.path)})
        return None

    language = detect_language(video, recognizer, scratch_dir)
    _emit("detect", f"Detected {language}", {"video": str(video.path), "language": language})

    plan = select_plan(language, recognizer.config)
    outcome = generate_subtitles(video, plan, recognizer)

    # Counted as processed whether or not generation succeeded.
    counters.processed += 1
    if outcome.succeeded:
        counters.succeeded += 1
    else:
        counters.failed += 1
    _emit(
        "generate",
        f"{video.path.name}: {outcome.value}",
        {
            "video": str(video.path),
            "model": plan.model,
            "task": plan.task,
            "language": plan.language,
            "outcome": outcome.value,
        },
    )
    return outcome


def run_batch(
    videos: list[VideoFile],
    config: EnsubConfig,
    recognizer: Recognizer | None = None,
    on_event: EventCallback | None = None,
) -> BatchCounters:
    """Process every video in order, never letting one failure stop the batch.

    Args:
        videos: Videos from the enumerator.
        config: Full application config.
        recognizer: Recognition invoker; built from ``config`` if omitted.
        on_event: Optional callback for streaming progress events.

    Returns:
        Final batch counters.
    """
    if recognizer is None:
        recognizer = Recognizer(config.recognizer)

    counters = BatchCounters()
    total = len(videos)

    for i, video in enumerate(videos, 1):
        console.rule(f"[bold][{i}/{total}] {video.path.name}[/bold]")

        def emit(event: PipelineEvent, _done: int = i) -> None:
            if on_event:
                event.progress = _done / total
                on_event(event)

        try:
            process_video(video, recognizer, config.scratch_dir, counters, emit=emit)
        except Exception as e:
            console.print(f"[red]Failed:[/red] {video.path}: {e}")
            counters.failed += 1

    if on_event:
        on_event(
            PipelineEvent(
                stage="done",
                progress=1.0,
                message="Batch complete",
                data={
                    "processed": counters.processed,
                    "skipped": counters.skipped,
                    "succeeded": counters.succeeded,
                    "failed": counters.failed,
                },
            )
        )
    return counters
