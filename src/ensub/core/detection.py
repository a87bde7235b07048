"""Language detection pass — a cheap Whisper run to guess the spoken language."""

from __future__ import annotations

import re
from pathlib import Path

from ensub.core.languages import FALLBACK_LANGUAGE
from ensub.core.models import VideoFile
from ensub.core.recognizer import Recognizer
from ensub.utils.console import console, print_tool_output

DETECTED_LANGUAGE_RE = re.compile(r"Detected language:\s*(.+)")

# Files Whisper may leave in the scratch dir for a detection run.
SCRATCH_EXTENSIONS = ("txt", "vtt", "srt", "json", "tsv")


def parse_detected_language(lines: list[str]) -> str | None:
    """Return the lowercased language from the first matching line, if any."""
    for line in lines:
        match = DETECTED_LANGUAGE_RE.search(line)
        if match:
            language = match.group(1).strip().lower()
            if language:
                return language
    return None


def cleanup_scratch(scratch_dir: Path, stem: str) -> list[Path]:
    """Delete detection byproducts for ``stem`` from the scratch directory.

    Returns:
        The paths that were removed.
    """
    removed = []
    for ext in SCRATCH_EXTENSIONS:
        path = scratch_dir / f"{stem}.{ext}"
        if path.is_file():
            path.unlink()
            removed.append(path)
    return removed


def detect_language(video: VideoFile, recognizer: Recognizer, scratch_dir: Path) -> str:
    """Run the detection pass and return the detected language name.

    Falls back to "english" when the tool fails or prints no detection
    line. Byproducts are always removed from ``scratch_dir`` afterwards so
    a later video with the same stem never sees them.
    """
    console.print(f"[bold]Detecting language[/bold] ({recognizer.config.detection_model})...")
    try:
        result = recognizer.run(
            video.path,
            model=recognizer.config.detection_model,
            task="transcribe",
            output_format="txt",
            output_dir=scratch_dir,
        )
    finally:
        cleanup_scratch(scratch_dir, video.stem)

    if not result.ok:
        console.print(
            f"[yellow]Language detection failed (exit {result.returncode}), "
            f"assuming {FALLBACK_LANGUAGE}.[/yellow]"
        )
        print_tool_output(result.lines)
        return FALLBACK_LANGUAGE

    language = parse_detected_language(result.lines)
    if language is None:
        console.print(
            f"[yellow]No 'Detected language' line in output, assuming {FALLBACK_LANGUAGE}.[/yellow]"
        )
        return FALLBACK_LANGUAGE

    console.print(f"[green]Detected language:[/green] {language}")
    return language
