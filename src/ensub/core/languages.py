"""Whisper-supported language names.

Whisper reports the detected language by its English name ("Detected
language: French") and accepts either the name or the code for --language.

Reference: https://github.com/openai/whisper/blob/main/whisper/tokenizer.py
"""

from __future__ import annotations

# fmt: off
WHISPER_LANGUAGES: dict[str, str] = {
    "af": "afrikaans",   "am": "amharic",        "ar": "arabic",
    "as": "assamese",    "az": "azerbaijani",     "ba": "bashkir",
    "be": "belarusian",  "bg": "bulgarian",       "bn": "bengali",
    "bo": "tibetan",     "br": "breton",          "bs": "bosnian",
    "ca": "catalan",     "cs": "czech",           "cy": "welsh",
    "da": "danish",      "de": "german",          "el": "greek",
    "en": "english",     "es": "spanish",         "et": "estonian",
    "eu": "basque",      "fa": "persian",         "fi": "finnish",
    "fo": "faroese",     "fr": "french",          "gl": "galician",
    "gu": "gujarati",    "ha": "hausa",           "haw": "hawaiian",
    "he": "hebrew",      "hi": "hindi",           "hr": "croatian",
    "ht": "haitian creole", "hu": "hungarian",    "hy": "armenian",
    "id": "indonesian",  "is": "icelandic",       "it": "italian",
    "ja": "japanese",    "jw": "javanese",        "ka": "georgian",
    "kk": "kazakh",      "km": "khmer",           "kn": "kannada",
    "ko": "korean",      "la": "latin",           "lb": "luxembourgish",
    "ln": "lingala",     "lo": "lao",             "lt": "lithuanian",
    "lv": "latvian",     "mg": "malagasy",        "mi": "maori",
    "mk": "macedonian",  "ml": "malayalam",       "mn": "mongolian",
    "mr": "marathi",     "ms": "malay",           "mt": "maltese",
    "my": "myanmar",     "ne": "nepali",          "nl": "dutch",
    "nn": "nynorsk",     "no": "norwegian",       "oc": "occitan",
    "pa": "punjabi",     "pl": "polish",          "ps": "pashto",
    "pt": "portuguese",  "ro": "romanian",        "ru": "russian",
    "sa": "sanskrit",    "sd": "sindhi",          "si": "sinhala",
    "sk": "slovak",      "sl": "slovenian",       "sn": "shona",
    "so": "somali",      "sq": "albanian",        "sr": "serbian",
    "su": "sundanese",   "sv": "swedish",         "sw": "swahili",
    "ta": "tamil",       "te": "telugu",          "tg": "tajik",
    "th": "thai",        "tk": "turkmen",         "tl": "tagalog",
    "tr": "turkish",     "tt": "tatar",           "uk": "ukrainian",
    "ur": "urdu",        "uz": "uzbek",           "vi": "vietnamese",
    "yi": "yiddish",     "yo": "yoruba",          "yue": "cantonese",
    "zh": "chinese",
}
# fmt: on

FALLBACK_LANGUAGE = "english"

_CODES_BY_NAME: dict[str, str] = {name: code for code, name in WHISPER_LANGUAGES.items()}


def language_code(name: str) -> str | None:
    """Get the Whisper code for a language name, or None if unknown."""
    return _CODES_BY_NAME.get(name.strip().lower())


def is_english(name: str) -> bool:
    """Check whether a detected language name means English audio."""
    return name.strip().lower() == FALLBACK_LANGUAGE
