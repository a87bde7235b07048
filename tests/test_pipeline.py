"""End-to-end batch tests with a fake recognition tool."""

import pytest

from ensub.core.events import PipelineEvent
from ensub.core.models import BatchCounters, GenerationOutcome, VideoFile
from ensub.core.pipeline import process_video, run_batch


def _arg(cmd, flag):
    return cmd[cmd.index(flag) + 1]


def _video(media_dir, name):
    path = media_dir / name
    path.touch()
    return VideoFile(path=path)


class TestSkip:
    def test_existing_subtitle_skips_recognition(
        self, media_dir, recognizer, fake_whisper, scratch_dir
    ):
        video = _video(media_dir, "done.mkv")
        video.final_subtitle_path.write_text("existing")
        counters = BatchCounters()

        assert process_video(video, recognizer, scratch_dir, counters) is None
        assert fake_whisper.calls == []
        assert counters.skipped == 1
        assert counters.processed == 0

    def test_rerun_after_success_skips(self, media_dir, config, recognizer, fake_whisper):
        video = _video(media_dir, "demo.mp4")
        first = run_batch([video], config, recognizer=recognizer)
        assert first.processed == 1
        calls_after_first = len(fake_whisper.calls)

        second = run_batch([video], config, recognizer=recognizer)
        assert second.skipped == 1
        assert second.processed == 0
        assert len(fake_whisper.calls) == calls_after_first


class TestScenarios:
    def test_english_video_transcribed_and_renamed(
        self, media_dir, config, recognizer, fake_whisper
    ):
        fake_whisper.detect_output = ["Detected language: English"]
        video = _video(media_dir, "demo.mp4")

        counters = run_batch([video], config, recognizer=recognizer)

        detect_cmd, generate_cmd = fake_whisper.calls
        assert _arg(detect_cmd, "--model") == "tiny"
        assert _arg(detect_cmd, "--task") == "transcribe"
        assert _arg(detect_cmd, "--output_format") == "txt"
        assert "--language" not in detect_cmd
        assert _arg(generate_cmd, "--model") == "small"
        assert _arg(generate_cmd, "--task") == "transcribe"
        assert _arg(generate_cmd, "--language") == "en"
        assert (media_dir / "demo.en.srt").is_file()
        assert not (media_dir / "demo.srt").exists()
        assert counters.processed == 1
        assert counters.succeeded == 1

    def test_german_video_translated_direct(self, media_dir, config, recognizer, fake_whisper):
        fake_whisper.detect_output = ["Detected language: German"]
        fake_whisper.generate_name = "{stem}.en.srt"
        video = _video(media_dir, "clip.mkv")

        counters = run_batch([video], config, recognizer=recognizer)

        generate_cmd = fake_whisper.calls[1]
        assert _arg(generate_cmd, "--model") == "large"
        assert _arg(generate_cmd, "--task") == "translate"
        assert _arg(generate_cmd, "--language") == "de"
        assert (media_dir / "clip.en.srt").is_file()
        assert counters.succeeded == 1

    def test_detection_failure_falls_back_to_english(
        self, media_dir, config, recognizer, fake_whisper
    ):
        fake_whisper.detect_returncode = 1
        video = _video(media_dir, "bad.mov")

        counters = run_batch([video], config, recognizer=recognizer)

        assert fake_whisper.models() == ["tiny", "small"]
        generate_cmd = fake_whisper.calls[1]
        assert _arg(generate_cmd, "--task") == "transcribe"
        assert _arg(generate_cmd, "--language") == "en"
        assert counters.processed == 1

    def test_generation_failure_continues_batch(self, media_dir, config, recognizer, fake_whisper):
        fake_whisper.generate_returncode = 2
        videos = [_video(media_dir, "a.mp4"), _video(media_dir, "b.mp4")]

        counters = run_batch(videos, config, recognizer=recognizer)

        assert fake_whisper.models() == ["tiny", "small", "tiny", "small"]
        assert list(media_dir.glob("*.srt")) == []
        # Attempts still count as processed; failures are tracked separately.
        assert counters.processed == 2
        assert counters.failed == 2
        assert counters.succeeded == 0


class TestBatch:
    def test_exactly_two_invocations_per_new_video(
        self, media_dir, config, recognizer, fake_whisper
    ):
        videos = [_video(media_dir, n) for n in ("a.mkv", "b.mp4", "c.avi")]
        videos[1].final_subtitle_path.write_text("done")

        counters = run_batch(videos, config, recognizer=recognizer)

        assert len(fake_whisper.calls) == 4
        assert counters.processed == 2
        assert counters.skipped == 1

    def test_scratch_clean_between_files(
        self, tmp_path, config, recognizer, fake_whisper, scratch_dir
    ):
        first = tmp_path / "one"
        second = tmp_path / "two"
        first.mkdir()
        second.mkdir()
        videos = [_video(first, "movie.mp4"), _video(second, "movie.mkv")]

        run_batch(videos, config, recognizer=recognizer)

        assert list(scratch_dir.iterdir()) == []
        assert (first / "movie.en.srt").is_file()
        assert (second / "movie.en.srt").is_file()

    def test_unexpected_error_is_contained(
        self, media_dir, config, recognizer, fake_whisper, monkeypatch
    ):
        def explode(*args, **kwargs):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr("ensub.core.pipeline.generate_subtitles", explode)
        videos = [_video(media_dir, "a.mp4"), _video(media_dir, "b.mp4")]

        counters = run_batch(videos, config, recognizer=recognizer)

        assert counters.failed == 2
        assert counters.processed == 0

    def test_events(self, media_dir, config, recognizer, fake_whisper):
        fake_whisper.detect_output = ["Detected language: French"]
        videos = [_video(media_dir, "a.mp4"), _video(media_dir, "b.mp4")]
        videos[0].final_subtitle_path.write_text("done")
        events: list[PipelineEvent] = []

        run_batch(videos, config, recognizer=recognizer, on_event=events.append)

        assert [e.stage for e in events] == ["skip", "detect", "generate", "done"]
        assert events[0].progress == pytest.approx(0.5)
        assert events[1].data["language"] == "french"
        assert events[2].data["outcome"] == GenerationOutcome.RENAMED.value
        assert events[2].data["task"] == "translate"
        assert events[-1].data == {"processed": 1, "skipped": 1, "succeeded": 1, "failed": 0}

    def test_empty_batch(self, config, recognizer):
        counters = run_batch([], config, recognizer=recognizer)
        assert counters == BatchCounters()
