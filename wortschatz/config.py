from __future__ import annotations

import logging
import os


def _f(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default


def _i(name: str, default: int) -> int:
    try:
        return int(float(os.getenv(name, str(default))))
    except Exception:
        return default


def _s(name: str, default: str) -> str:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    return v.strip()


def _level(name: str, default: str) -> str:
    v = _s(name, default).upper()
    if not isinstance(logging.getLevelName(v), int):
        return default
    return v


# Logging
LOG_LEVEL: str = _level("WS_LOG_LEVEL", "INFO")

# Language model provider (OpenAI-compatible chat completions)
DEFAULT_LLM_BASE_URL: str = "https://api.deepseek.com/v1"
DEFAULT_LLM_MODEL: str = "deepseek-chat"
DEFAULT_LLM_TEMPERATURE: float = 0.3
DEFAULT_LLM_MAX_TOKENS: int = 500

# AnkiConnect
DEFAULT_ANKI_CONNECT_URL: str = "http://127.0.0.1:8765"
DEFAULT_ANKI_DECK_NAME: str = "Default"
ANKI_ACTION: str = "addNote"
ANKI_VERSION: int = 6
ANKI_MODEL_NAME: str = "Basic"
ANKI_TAGS: list[str] = ["german-learning-app"]

# Outbound HTTP
DEFAULT_UPSTREAM_TIMEOUT_SEC: float = 60.0

# Reading surface
DEFAULT_NOTIFICATION_TTL_SEC: float = 3.0
DEFAULT_SPEECH_LANG: str = "de-DE"
DEFAULT_SPEECH_RATE: float = 0.9

# Persisted client state
SAVED_TEXTS_SLOT: str = "savedTexts"
