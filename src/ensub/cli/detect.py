"""ensub detect command — report the spoken language of one video."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from ensub.cli.generate import load_cli_config, recognizer_overrides
from ensub.core.config import CallMethod
from ensub.core.detection import detect_language
from ensub.core.discovery import InvalidInputError, find_videos
from ensub.core.languages import language_code
from ensub.core.recognizer import Recognizer
from ensub.core.selection import select_plan
from ensub.utils.console import console
from ensub.utils.paths import ensure_scratch_dir


def detect(
    video: Annotated[
        Path,
        typer.Argument(help="Video to run language detection on."),
    ],
    threads: Annotated[
        Optional[int],
        typer.Option("--threads", help="Threads passed to the recognition tool."),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", help="Seconds before the recognition run is abandoned."),
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
    """Run only the language-detection pass and show the plan it would pick."""
    config = load_cli_config(
        **recognizer_overrides(threads, timeout, call_method, executable, scratch_dir)
    )

    try:
        (target,) = find_videos(video, config.scan)
    except InvalidInputError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    try:
        ensure_scratch_dir(config.scratch_dir)
    except OSError as e:
        console.print(f"[red]Cannot create scratch directory {config.scratch_dir}:[/red] {e}")
        raise typer.Exit(1)

    recognizer = Recognizer(config.recognizer)
    language = detect_language(target, recognizer, config.scratch_dir)
    plan = select_plan(language, config.recognizer)

    code = language_code(language)
    label = f"{language} ({code})" if code else language
    console.print(f"[bold]Language:[/bold] {label}")
    console.print(
        f"[bold]Plan:[/bold] model={plan.model}, task={plan.task}, language={plan.language}"
    )
