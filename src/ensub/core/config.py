"""Configuration system for ensub.

Layered config loading (lowest to highest priority):
1. config/default.toml (shipped with package)
2. ~/.config/ensub/config.toml (user-level)
3. ./ensub.toml (project-level)
4. Environment variables (ENSUB_RECOGNIZER__THREADS, etc.)
5. CLI flags
"""

from __future__ import annotations

import tempfile
import tomllib
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, EnvSettingsSource, SettingsConfigDict

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_DEFAULT_CONFIG = _PACKAGE_ROOT / "config" / "default.toml"
_USER_CONFIG = Path.home() / ".config" / "ensub" / "config.toml"
_PROJECT_CONFIG = Path("ensub.toml")

DEFAULT_EXTENSIONS = ("mkv", "mp4", "avi", "mov", "webm", "flv")


class CallMethod(str, Enum):
    """How the recognition tool is launched."""

    DIRECT = "direct"  # run `executable`
    MODULE = "module"  # run `interpreter -m module`


class RecognizerConfig(BaseModel):
    call_method: Literal["direct", "module"] = "direct"
    executable: str = "whisper"  # used when call_method == "direct"
    interpreter: str = "python"  # used when call_method == "module"
    module: str = "whisper"
    threads: int = 4
    timeout: float | None = None  # seconds per invocation, None = wait forever
    detection_model: str = "tiny"
    english_model: str = "small"
    translation_model: str = "large"


class ScanConfig(BaseModel):
    root_dir: Path | None = None  # None = current working directory
    extensions: list[str] = list(DEFAULT_EXTENSIONS)

    @field_validator("extensions")
    @classmethod
    def _normalize(cls, value: list[str]) -> list[str]:
        return normalize_extensions(value)


class EnsubConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ENSUB_",
        env_nested_delimiter="__",
    )

    recognizer: RecognizerConfig = RecognizerConfig()
    scan: ScanConfig = ScanConfig()
    scratch_dir: Path = Path(tempfile.gettempdir()) / "ensub"


def normalize_extensions(extensions: list[str]) -> list[str]:
    """Lowercase extensions, strip leading dots, drop blanks and repeats."""
    normalized: list[str] = []
    for ext in extensions:
        ext = ext.strip().lstrip(".").lower()
        if ext and ext not in normalized:
            normalized.append(ext)
    return normalized


def _load_toml(path: Path) -> dict:
    """Load a TOML file if it exists, return empty dict otherwise."""
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _env_layer() -> dict:
    """Read ENSUB_* variables into a nested dict shaped like the TOML layers."""
    return EnvSettingsSource(EnsubConfig)()


def load_config(**cli_overrides: object) -> EnsubConfig:
    """Load configuration from all layers and merge.

    Args:
        **cli_overrides: Direct overrides from CLI flags. Keys can be
            dot-separated (e.g. recognizer.threads=8).
    """
    # Layer 1-3: TOML files
    config_data: dict = {}
    for path in (_DEFAULT_CONFIG, _USER_CONFIG, _PROJECT_CONFIG):
        layer = _load_toml(path)
        config_data = _deep_merge(config_data, layer)

    # Flatten 'general' section into top-level
    if "general" in config_data:
        general = config_data.pop("general")
        config_data = _deep_merge(config_data, general)

    # Layer 4: ENSUB_* env vars (and .env, loaded by the CLI) rank above the TOML files
    config_data = _deep_merge(config_data, _env_layer())

    # Layer 5: CLI overrides (dot-separated keys)
    for key, value in cli_overrides.items():
        if value is None:
            continue
        parts = key.split(".")
        target = config_data
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value

    return EnsubConfig(**config_data)
