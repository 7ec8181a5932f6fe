"""Word analysis: validate input, prompt the language model, parse the answer."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..llm import build_word_analysis_prompt, chat_complete
from ..settings import Settings
from ..utils.exceptions import (
    AnalysisFailed,
    InvalidInput,
    MalformedAnalysis,
    MisconfiguredService,
    WortschatzError,
    log_error,
)
from ..utils.json_parser import parse_word_analysis
from ..utils.llm_validation import WordAnalysis

logger = logging.getLogger(__name__)


def validate_analysis_input(word: Any, context: Any) -> None:
    """Both values must be strings that are non-empty after trimming."""
    for name, value in (("word", word), ("context", context)):
        if not isinstance(value, str) or not value.strip():
            raise InvalidInput(f"{name!r} must be a non-empty string", field=name)


async def analyze_word(
    word: Any,
    context: Any,
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> WordAnalysis:
    """Analyze ``word`` as it is used in ``context``.

    Input and configuration are checked before any network traffic. Every
    failure surfaces as a WortschatzError subclass; unexpected exceptions are
    wrapped in AnalysisFailed.
    """
    validate_analysis_input(word, context)

    if not settings.llm_api_key:
        err = MisconfiguredService("DEEPSEEK_API_KEY is not configured", config_key="DEEPSEEK_API_KEY")
        log_error(err, logger)
        raise err

    messages = build_word_analysis_prompt(word, context)

    try:
        content = await chat_complete(
            messages,
            api_key=settings.llm_api_key,
            base_url=settings.llm_base_url,
            model=settings.llm_model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.upstream_timeout_sec,
            transport=transport,
        )
        return parse_word_analysis(content)
    except MalformedAnalysis as e:
        logger.error(f"Raw content: {e.raw}")
        logger.error(f"Cleaned content: {e.cleaned}")
        log_error(e, logger)
        raise
    except WortschatzError as e:
        log_error(e, logger)
        raise
    except Exception as e:
        logger.error(f"Word analysis failed for {word!r}: {e}", exc_info=True)
        raise AnalysisFailed(str(e), details={"type": e.__class__.__name__}) from e
