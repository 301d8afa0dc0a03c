# app/config.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging

from typedash.app.errors import ConfigError
from typedash.utils.corpus import DEFAULT_LANGUAGE, NATURAL_LANGUAGES, PROGRAMMING_LANGUAGES

log = logging.getLogger(__name__)

MODES = ("15", "30", "60", "bot", "multiplier")
WORD_MODES = ("normal", "code-python", "code-javascript", "code-java")
WORD_LENGTHS = ("short", "medium", "long", "mixed")
LANGUAGES = NATURAL_LANGUAGES + PROGRAMMING_LANGUAGES

DEFAULT_MODE = "60"
DEFAULT_WORD_MODE = "normal"
DEFAULT_WORD_LENGTH = "mixed"

# seconds; modes without their own duration run a full minute
MODE_DURATIONS = {"15": 15, "30": 30, "60": 60, "bot": 60, "multiplier": 60}

_CONFIG_FILE = Path("typedash.json")


@dataclass(frozen=True)
class SessionConfig:
    mode: str = DEFAULT_MODE
    word_mode: str = DEFAULT_WORD_MODE
    word_length: str = DEFAULT_WORD_LENGTH
    language: str = DEFAULT_LANGUAGE

    @property
    def is_code(self) -> bool:
        return self.word_mode.startswith("code-")

    @property
    def duration(self) -> int:
        return MODE_DURATIONS.get(self.mode, MODE_DURATIONS[DEFAULT_MODE])

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def _pick(name: str, value: Any, allowed, default: str) -> str:
    v = str(value).strip().lower() if value is not None else default
    if v not in allowed:
        log.warning("Unknown %s %r, using %r", name, value, default)
        return default
    return v


def normalize(
    mode: Any = DEFAULT_MODE,
    word_mode: Any = DEFAULT_WORD_MODE,
    word_length: Any = DEFAULT_WORD_LENGTH,
    language: Any = DEFAULT_LANGUAGE,
) -> SessionConfig:
    """Build a config, replacing any unknown token with its default."""
    return SessionConfig(
        mode=_pick("mode", mode, MODES, DEFAULT_MODE),
        word_mode=_pick("word mode", word_mode, WORD_MODES, DEFAULT_WORD_MODE),
        word_length=_pick("word length", word_length, WORD_LENGTHS, DEFAULT_WORD_LENGTH),
        language=_pick("language", language, LANGUAGES, DEFAULT_LANGUAGE),
    )


def config_from_dict(d: Any) -> SessionConfig:
    if not isinstance(d, dict):
        raise ConfigError(f"Config must be an object, got {type(d).__name__}")
    unknown = set(d) - {"mode", "word_mode", "word_length", "language"}
    if unknown:
        log.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
    return normalize(
        mode=d.get("mode", DEFAULT_MODE),
        word_mode=d.get("word_mode", DEFAULT_WORD_MODE),
        word_length=d.get("word_length", DEFAULT_WORD_LENGTH),
        language=d.get("language", DEFAULT_LANGUAGE),
    )


def load_config(path: Optional[Path] = None) -> SessionConfig:
    """Load typedash.json (if present). Never raises: broken files give defaults."""
    path = Path(path) if path is not None else _CONFIG_FILE
    if not path.exists():
        return SessionConfig()
    try:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except ValueError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e
        return config_from_dict(data)
    except (ConfigError, OSError) as e:
        log.warning("Failed to load config: %s", e)
        return SessionConfig()


def save_config(config: SessionConfig, path: Optional[Path] = None) -> None:
    path = Path(path) if path is not None else _CONFIG_FILE
    path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
