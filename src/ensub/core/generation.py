"""Generation pass — produce the English SRT and move it to its final name."""

from __future__ import annotations

import os

from ensub.core.models import GenerationOutcome, GenerationPlan, VideoFile
from ensub.core.recognizer import Recognizer
from ensub.utils.console import console, print_tool_output


def resolve_output(video: VideoFile, lines: list[str] | None = None) -> GenerationOutcome:
    """Locate the tool's SRT and make sure it ends up at the final path.

    Checked in order: the conventional ``<stem>.srt`` (moved to
    ``<stem>.en.srt``, overwriting), then the final path written directly.
    """
    raw_path = video.raw_subtitle_path
    final_path = video.final_subtitle_path

    if raw_path.is_file():
        if raw_path == final_path:
            console.print(f"[green]Saved:[/green] {final_path}")
            return GenerationOutcome.DIRECT
        try:
            os.replace(raw_path, final_path)
        except OSError as e:
            console.print(f"[red]Could not rename {raw_path.name} to {final_path.name}:[/red] {e}")
            return GenerationOutcome.FAILED
        console.print(f"[green]Saved:[/green] {final_path}")
        return GenerationOutcome.RENAMED

    if final_path.is_file():
        console.print(f"[green]Saved:[/green] {final_path}")
        return GenerationOutcome.DIRECT

    console.print(
        f"[yellow]No subtitle output found. Checked:[/yellow] {raw_path} [yellow]and[/yellow] "
        f"{final_path}"
    )
    if lines:
        print_tool_output(lines)
    return GenerationOutcome.MISSING


def generate_subtitles(
    video: VideoFile, plan: GenerationPlan, recognizer: Recognizer
) -> GenerationOutcome:
    """Run the generation pass for one video and resolve its output file."""
    raw_path = video.raw_subtitle_path
    if raw_path.is_file():
        # Stale output from an earlier run would be mistaken for this one.
        console.print(f"[dim]Removing stale {raw_path.name}[/dim]")
        raw_path.unlink()

    console.print(
        f"[bold]Generating subtitles[/bold] "
        f"(model={plan.model}, task={plan.task}, language={plan.language})..."
    )
    result = recognizer.run(
        video.path,
        model=plan.model,
        task=plan.task,
        output_format="srt",
        output_dir=video.directory,
        language=plan.language,
    )

    if not result.ok:
        console.print(
            f"[red]Subtitle generation failed (exit {result.returncode}):[/red] {video.path}"
        )
        print_tool_output(result.lines)
        return GenerationOutcome.FAILED

    return resolve_output(video, result.lines)
