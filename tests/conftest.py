"""Shared test fixtures."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from ensub.core.config import EnsubConfig, RecognizerConfig
from ensub.core.recognizer import Recognizer


def _arg(cmd: list[str], flag: str) -> str | None:
    if flag in cmd:
        return cmd[cmd.index(flag) + 1]
    return None


@dataclass
class FakeWhisper:
    """Stands in for ``subprocess.run`` of the Whisper CLI.

    Records every command and mimics the tool's file-writing convention:
    ``<output_dir>/<stem>.<format>``.

    Attributes:
        detect_output: Lines printed by the detection (tiny model) run.
        detect_returncode: Exit status of the detection run.
        generate_returncode: Exit status of the generation run.
        generate_name: Output filename template for generation; ``{stem}``
            is replaced. None writes nothing.
    """

    detect_output: list[str] = field(
        default_factory=lambda: ["Detecting language using up to the first 30 seconds."]
    )
    detect_returncode: int = 0
    generate_returncode: int = 0
    generate_name: str | None = "{stem}.srt"
    calls: list[list[str]] = field(default_factory=list)

    def __call__(self, cmd, **kwargs) -> subprocess.CompletedProcess:
        self.calls.append(list(cmd))
        video = Path(cmd[cmd.index("--model") - 1])
        output_dir = Path(_arg(cmd, "--output_dir"))
        fmt = _arg(cmd, "--output_format")

        if _arg(cmd, "--model") == "tiny":
            (output_dir / f"{video.stem}.{fmt}").write_text("detection text")
            if self.detect_returncode == 0:
                (output_dir / f"{video.stem}.json").write_text("{}")
            out = "\n".join(self.detect_output)
            return subprocess.CompletedProcess(cmd, self.detect_returncode, stdout=out.encode())

        if self.generate_returncode == 0 and self.generate_name:
            name = self.generate_name.format(stem=video.stem)
            (output_dir / name).write_text("1\n00:00:00,000 --> 00:00:01,000\nHello\n")
        return subprocess.CompletedProcess(
            cmd, self.generate_returncode, stdout=b"[00:00.000 --> 00:01.000] Hello\n"
        )

    def models(self) -> list[str]:
        return [_arg(c, "--model") for c in self.calls]


@pytest.fixture
def fake_whisper() -> FakeWhisper:
    return FakeWhisper()


@pytest.fixture
def recognizer(fake_whisper: FakeWhisper) -> Recognizer:
    return Recognizer(RecognizerConfig(threads=2), runner=fake_whisper)


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def config(tmp_path: Path, scratch_dir: Path) -> EnsubConfig:
    return EnsubConfig(
        recognizer=RecognizerConfig(threads=2),
        scan={"root_dir": tmp_path / "media"},
        scratch_dir=scratch_dir,
    )


@pytest.fixture
def media_dir(tmp_path: Path) -> Path:
    path = tmp_path / "media"
    path.mkdir()
    return path
