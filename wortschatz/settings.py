from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from . import config
from .config import _f, _i, _s


@dataclass
class Settings:
    llm_api_key: Optional[str] = None
    llm_base_url: str = config.DEFAULT_LLM_BASE_URL
    llm_model: str = config.DEFAULT_LLM_MODEL
    llm_temperature: float = config.DEFAULT_LLM_TEMPERATURE
    llm_max_tokens: int = config.DEFAULT_LLM_MAX_TOKENS
    anki_connect_url: str = config.DEFAULT_ANKI_CONNECT_URL
    anki_deck_name: str = config.DEFAULT_ANKI_DECK_NAME
    upstream_timeout_sec: float = config.DEFAULT_UPSTREAM_TIMEOUT_SEC
    notification_ttl_sec: float = config.DEFAULT_NOTIFICATION_TTL_SEC
    speech_lang: str = config.DEFAULT_SPEECH_LANG
    speech_rate: float = config.DEFAULT_SPEECH_RATE
    anki_tags: list[str] = field(default_factory=lambda: list(config.ANKI_TAGS))

    @classmethod
    def from_env(cls) -> "Settings":
        key = os.getenv("DEEPSEEK_API_KEY")
        return cls(
            llm_api_key=key.strip() if key and key.strip() else None,
            llm_base_url=_s("DEEPSEEK_BASE_URL", config.DEFAULT_LLM_BASE_URL),
            llm_model=_s("DEEPSEEK_MODEL", config.DEFAULT_LLM_MODEL),
            llm_temperature=_f("WS_LLM_TEMPERATURE", config.DEFAULT_LLM_TEMPERATURE),
            llm_max_tokens=_i("WS_LLM_MAX_TOKENS", config.DEFAULT_LLM_MAX_TOKENS),
            anki_connect_url=_s("ANKI_CONNECT_URL", config.DEFAULT_ANKI_CONNECT_URL),
            anki_deck_name=_s("ANKI_DECK_NAME", config.DEFAULT_ANKI_DECK_NAME),
            upstream_timeout_sec=_f("WS_UPSTREAM_TIMEOUT_SEC", config.DEFAULT_UPSTREAM_TIMEOUT_SEC),
            notification_ttl_sec=_f("WS_NOTIFICATION_TTL_SEC", config.DEFAULT_NOTIFICATION_TTL_SEC),
            speech_lang=_s("WS_SPEECH_LANG", config.DEFAULT_SPEECH_LANG),
            speech_rate=_f("WS_SPEECH_RATE", config.DEFAULT_SPEECH_RATE),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
