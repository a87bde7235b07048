"""Invoke the external speech-recognition command (Whisper CLI)."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Callable

from ensub.core.config import RecognizerConfig
from ensub.core.languages import language_code
from ensub.core.models import RecognitionResult
from ensub.utils.encoding import external_io_encoding

Runner = Callable[..., subprocess.CompletedProcess]

# Shell conventions for "command not found" and "timed out".
EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124


class Recognizer:
    """Runs the recognition tool with a fixed configuration.

    Args:
        config: Executable, call method, thread count and timeout.
        runner: Process launcher, ``subprocess.run`` by default.
    """

    def __init__(self, config: RecognizerConfig, runner: Runner = subprocess.run) -> None:
        self.config = config
        self._runner = runner

    def prefix(self) -> list[str]:
        """Command prefix for the configured call method."""
        if self.config.call_method == "module":
            return [self.config.interpreter, "-m", self.config.module]
        return [self.config.executable]

    def is_available(self) -> bool:
        """Check if the executable (or interpreter) can be found on PATH."""
        return shutil.which(self.prefix()[0]) is not None

    def build_command(
        self,
        video_path: Path,
        model: str,
        task: str,
        output_format: str,
        output_dir: Path,
        language: str | None = None,
    ) -> list[str]:
        cmd = self.prefix()
        cmd.extend([str(video_path), "--model", model, "--task", task])
        if language:
            # Whisper only accepts codes or title-case names; detection yields lowercase names.
            cmd.extend(["--language", language_code(language) or language])
        cmd.extend(
            [
                "--threads",
                str(self.config.threads),
                "--output_format",
                output_format,
                "--output_dir",
                str(output_dir),
            ]
        )
        return cmd

    def run(
        self,
        video_path: Path,
        model: str,
        task: str,
        output_format: str,
        output_dir: Path,
        language: str | None = None,
    ) -> RecognitionResult:
        """Run one recognition pass and capture its combined output.

        Never raises for a failing tool: a non-zero exit, a missing
        executable (127) or a timeout (124) all come back as a
        RecognitionResult for the caller to inspect.
        """
        cmd = self.build_command(
            video_path,
            model=model,
            task=task,
            output_format=output_format,
            output_dir=output_dir,
            language=language,
        )

        with external_io_encoding():
            try:
                proc = self._runner(
                    cmd,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    timeout=self.config.timeout,
                    check=False,
                )
            except FileNotFoundError as e:
                return RecognitionResult(
                    returncode=EXIT_NOT_FOUND,
                    lines=[f"Recognition command not found: {cmd[0]} ({e})"],
                    command=cmd,
                )
            except subprocess.TimeoutExpired as e:
                lines = _decode_lines(e.output)
                lines.append(f"Timed out after {self.config.timeout} seconds")
                return RecognitionResult(returncode=EXIT_TIMEOUT, lines=lines, command=cmd)

        return RecognitionResult(
            returncode=proc.returncode,
            lines=_decode_lines(proc.stdout),
            command=cmd,
        )


def _decode_lines(output: bytes | str | None) -> list[str]:
    """Split captured output into lines, replacing undecodable bytes."""
    if not output:
        return []
    if isinstance(output, bytes):
        output = output.decode("utf-8", errors="replace")
    return output.splitlines()
