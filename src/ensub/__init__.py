"""ensub — batch English subtitles for a video library via Whisper."""

__version__ = "0.1.0"
