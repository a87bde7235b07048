"""Pick the generation model and task from the detected language."""

from __future__ import annotations

from ensub.core.config import RecognizerConfig
from ensub.core.languages import is_english
from ensub.core.models import OUTPUT_LANGUAGE, GenerationPlan


def select_plan(language: str, config: RecognizerConfig | None = None) -> GenerationPlan:
    """Choose model, task and language hint for the generation pass.

    English audio is transcribed with the small model. Anything else is
    translated to English with the large model, passing the detected
    language through as the source hint.
    """
    if config is None:
        config = RecognizerConfig()

    if is_english(language):
        return GenerationPlan(
            model=config.english_model, task="transcribe", language=OUTPUT_LANGUAGE
        )
    return GenerationPlan(model=config.translation_model, task="translate", language=language)
