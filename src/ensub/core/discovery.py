"""Resolve the videos to process — one explicit file or a directory scan."""

from __future__ import annotations

from pathlib import Path

from ensub.core.config import ScanConfig
from ensub.core.models import VideoFile
from ensub.utils.console import console


class InvalidInputError(ValueError):
    """The explicitly named video does not exist or is not a regular file."""


def scan_root(config: ScanConfig) -> Path:
    """Directory scanned in batch mode, falling back to the working directory."""
    if config.root_dir is not None:
        return Path(config.root_dir).expanduser().resolve()
    return Path.cwd().resolve()


def find_videos(path: Path | None, config: ScanConfig) -> list[VideoFile]:
    """List the videos to process.

    Args:
        path: A single video to process, or None to scan the configured root.
        config: Scan settings (root directory and extension set).

    Returns:
        VideoFile entries, grouped by extension in configured order and
        sorted within each group.

    Raises:
        InvalidInputError: If ``path`` is given but is not an existing file.
    """
    if path is not None:
        path = Path(path).expanduser()
        if not path.is_file():
            raise InvalidInputError(f"File not found or not a regular file: {path}")
        console.print(f"[bold]Mode:[/bold] single file ({path.resolve()})")
        return [VideoFile(path=path.resolve())]

    root = scan_root(config)
    console.print(f"[bold]Mode:[/bold] batch scan of {root}")
    console.print(f"[dim]Extensions: {', '.join(config.extensions)}[/dim]")

    candidates = sorted(p for p in root.rglob("*") if p.is_file())
    videos: list[VideoFile] = []
    seen: set[Path] = set()
    for ext in config.extensions:
        suffix = f".{ext}"
        for candidate in candidates:
            if candidate.suffix.lower() != suffix:
                continue
            resolved = candidate.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            videos.append(VideoFile(path=resolved))
    return videos
