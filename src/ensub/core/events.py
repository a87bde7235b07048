"""Batch event system for streaming progress to external consumers.

Provides a lightweight callback mechanism that the batch driver emits events
through. Consumers (tests, wrappers, progress displays) register a callback
to receive per-file updates without modifying pipeline logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class PipelineEvent:
    """A progress event emitted while processing a batch.

    Attributes:
        stage: Stage name (skip, detect, generate, done).
        progress: Position within the batch, 0.0 to 1.0.
        message: Human-readable status message.
        data: Optional payload (video path, detected language, outcome).
    """

    stage: str
    progress: float
    message: str
    data: dict | None = field(default=None)


EventCallback = Callable[[PipelineEvent], None]
