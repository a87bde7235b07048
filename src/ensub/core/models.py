"""Shared data models for ensub."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

# Every generated subtitle is English: non-English audio is translated,
# English audio is transcribed.
OUTPUT_LANGUAGE = "en"


@dataclass(frozen=True)
class VideoFile:
    """A video found by the enumerator."""

    path: Path

    @property
    def directory(self) -> Path:
        return self.path.parent

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def final_subtitle_path(self) -> Path:
        """Canonical output, also the marker that the video is already done."""
        return self.directory / f"{self.stem}.{OUTPUT_LANGUAGE}.srt"

    @property
    def raw_subtitle_path(self) -> Path:
        """Where the recognition tool writes its SRT by convention."""
        return self.directory / f"{self.stem}.srt"


@dataclass(frozen=True)
class GenerationPlan:
    """Model, task and source-language hint for the generation pass."""

    model: str
    task: str  # "transcribe" or "translate"
    language: str


@dataclass
class RecognitionResult:
    """Exit status and combined stdout/stderr of one recognition run."""

    returncode: int
    lines: list[str] = field(default_factory=list)
    command: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class GenerationOutcome(str, Enum):
    """How the generation pass ended for one video."""

    RENAMED = "renamed"  # raw <stem>.srt moved to <stem>.en.srt
    DIRECT = "direct"  # tool wrote the final name itself
    FAILED = "failed"  # non-zero exit or move error
    MISSING = "missing"  # exit 0 but no output file found

    @property
    def succeeded(self) -> bool:
        return self in (GenerationOutcome.RENAMED, GenerationOutcome.DIRECT)


@dataclass
class BatchCounters:
    """Running totals for one batch run.

    ``processed`` counts every video that reached the generation pass,
    whatever its outcome. ``succeeded`` and ``failed`` record outcomes;
    ``failed`` also counts videos that raised before generation started.
    """

    processed: int = 0
    skipped: int = 0
    succeeded: int = 0
    failed: int = 0
