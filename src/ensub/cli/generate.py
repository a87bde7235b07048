"""ensub generate command — English subtitles for one video or a whole tree."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from ensub.core.config import CallMethod, EnsubConfig, load_config
from ensub.core.discovery import InvalidInputError, find_videos
from ensub.core.models import BatchCounters
from ensub.core.pipeline import run_batch
from ensub.core.recognizer import Recognizer
from ensub.utils.console import console
from ensub.utils.paths import ensure_scratch_dir


def recognizer_overrides(
    threads: int | None,
    timeout: float | None,
    call_method: CallMethod | None,
    executable: str | None,
    scratch_dir: Path | None,
) -> dict[str, object]:
    """Map shared CLI flags onto dotted config keys."""
    return {
        "recognizer.threads": threads,
        "recognizer.timeout": timeout,
        "recognizer.call_method": call_method.value if call_method else None,
        "recognizer.executable": executable,
        "scratch_dir": scratch_dir,
    }


def load_cli_config(**overrides: object) -> EnsubConfig:
    """Load config for a command, turning invalid settings into a CLI error."""
    try:
        return load_config(**overrides)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def generate(
    video: Annotated[
        Optional[Path],
        typer.Argument(help="A single video to subtitle. Omit to scan the root directory."),
    ] = None,
    root: Annotated[
        Optional[Path],
        typer.Option("--root", "-r", help="Directory to scan in batch mode (default: cwd)."),
    ] = None,
    extensions: Annotated[
        Optional[list[str]],
        typer.Option("--ext", "-e", help="Video extension to scan for. Repeatable."),
    ] = None,
    threads: Annotated[
        Optional[int],
        typer.Option("--threads", help="Threads passed to the recognition tool."),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", help="Seconds before a recognition run is abandoned."),
    ] = None,
    call_method: Annotated[
        Optional[CallMethod],
        typer.Option("--call-method", help="How to run Whisper: direct or module."),
    ] = None,
    executable: Annotated[
        Optional[str],
        typer.Option("--executable", help="Recognition executable for direct calls."),
    ] = None,
    scratch_dir: Annotated[
        Optional[Path],
        typer.Option("--scratch-dir", help="Directory for language-detection byproducts."),
    ] = None,
) -> None:
    """Generate <name>.en.srt next to each video that does not have one yet.

    Detects the spoken language with a quick pass, then transcribes English
    audio or translates anything else to English.
    """
    overrides = recognizer_overrides(threads, timeout, call_method, executable, scratch_dir)
    overrides["scan.root_dir"] = root
    overrides["scan.extensions"] = extensions or None
    config = load_cli_config(**overrides)

    try:
        videos = find_videos(video, config.scan)
    except InvalidInputError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    try:
        ensure_scratch_dir(config.scratch_dir)
    except OSError as e:
        console.print(f"[red]Cannot create scratch directory {config.scratch_dir}:[/red] {e}")
        raise typer.Exit(1)

    recognizer = Recognizer(config.recognizer)
    if not recognizer.is_available():
        console.print(
            f"[yellow]'{recognizer.prefix()[0]}' not found on PATH; "
            "recognition runs will fail.[/yellow]"
        )

    if not videos:
        console.print("[yellow]No videos found.[/yellow]")
    else:
        console.print(f"[bold]Found {len(videos)} video(s).[/bold]\n")

    counters = run_batch(videos, config, recognizer=recognizer)
    print_summary(counters)


def print_summary(counters: BatchCounters) -> None:
    """Print the end-of-run totals."""
    console.print()
    table = Table(title="Batch Results")
    table.add_column("Processed", justify="right")
    table.add_column("Skipped", justify="right", style="dim")
    table.add_column("Succeeded", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_row(
        str(counters.processed),
        str(counters.skipped),
        str(counters.succeeded),
        str(counters.failed),
    )
    console.print(table)
    console.print(
        f"\n[bold]Processed: {counters.processed}, skipped: {counters.skipped}[/bold]"
    )
