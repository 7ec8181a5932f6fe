"""
Gateway services called directly, checking the error taxonomy rather than
the HTTP mapping.
"""

import json

import pytest

from wortschatz.llm.client import extract_completion_text
from wortschatz.services.analysis_service import analyze_word
from wortschatz.services.flashcard_service import add_flashcard
from wortschatz.utils.exceptions import (
    EmptyUpstreamResponse,
    FlashcardServiceError,
    InvalidInput,
    MalformedAnalysis,
    MisconfiguredService,
    UpstreamError,
)

from conftest import ANKI_HOST, HAUS_ANALYSIS, LLM_HOST, llm_envelope


async def test_analyze_word_returns_model(settings, upstream):
    upstream.reply(LLM_HOST, json=llm_envelope(json.dumps(HAUS_ANALYSIS)))

    analysis = await analyze_word("Haus", "Das Haus ist groß", settings, transport=upstream.transport)

    assert analysis.model_dump() == HAUS_ANALYSIS


async def test_input_checked_before_configuration(settings, upstream):
    settings.llm_api_key = None
    with pytest.raises(InvalidInput) as exc:
        await analyze_word("Haus", " ", settings, transport=upstream.transport)
    assert exc.value.field == "context"
    assert exc.value.status_code == 400


async def test_missing_key(settings, upstream):
    settings.llm_api_key = None
    with pytest.raises(MisconfiguredService):
        await analyze_word("Haus", "Das Haus ist groß", settings, transport=upstream.transport)
    assert upstream.requests == []


async def test_upstream_status_is_preserved_for_logging(settings, upstream):
    upstream.reply(LLM_HOST, 429, json={"error": {"message": "slow down"}})

    with pytest.raises(UpstreamError) as exc:
        await analyze_word("Haus", "Das Haus ist groß", settings, transport=upstream.transport)

    assert exc.value.upstream_status == 429
    assert exc.value.details["body"] == {"error": {"message": "slow down"}}


async def test_non_json_envelope_is_empty_response(settings, upstream):
    upstream.reply(LLM_HOST, text="<html>gateway</html>")

    with pytest.raises(EmptyUpstreamResponse):
        await analyze_word("Haus", "Das Haus ist groß", settings, transport=upstream.transport)


async def test_malformed_content(settings, upstream):
    upstream.reply(LLM_HOST, json=llm_envelope('{"example": {"german": "a", "russian": "b"}}'))

    with pytest.raises(MalformedAnalysis) as exc:
        await analyze_word("Haus", "Das Haus ist groß", settings, transport=upstream.transport)

    assert exc.value.details["errors"][0]["field"] == "grammarDetailsAndUsage"


def test_extract_prefers_raw_text_then_message():
    both = {"choices": [{"text": "raw", "message": {"content": "chat"}}]}
    assert extract_completion_text(both) == "raw"
    assert extract_completion_text(llm_envelope("chat")) == "chat"
    assert extract_completion_text({"choices": [{"text": "", "message": {"content": "chat"}}]}) == "chat"
    assert extract_completion_text(["not", "a", "dict"]) is None


async def test_add_flashcard_returns_note_id(settings, upstream):
    upstream.reply(ANKI_HOST, json={"result": 1496198395707, "error": None})

    note_id = await add_flashcard("Das Haus ist groß.", "Дом большой.", settings, transport=upstream.transport)

    assert note_id == 1496198395707


async def test_add_flashcard_non_json_body(settings, upstream):
    upstream.reply(ANKI_HOST, text="AnkiConnect v.6")

    with pytest.raises(FlashcardServiceError):
        await add_flashcard("a", "b", settings, transport=upstream.transport)
