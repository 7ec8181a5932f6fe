"""Flashcard export through AnkiConnect's ``addNote`` action."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import ANKI_ACTION, ANKI_MODEL_NAME, ANKI_VERSION
from ..settings import Settings
from ..utils.exceptions import FlashcardServiceError, log_error

logger = logging.getLogger(__name__)


def build_add_note_request(german_phrase: str, russian_translation: str, settings: Settings) -> Dict[str, Any]:
    return {
        "action": ANKI_ACTION,
        "version": ANKI_VERSION,
        "params": {
            "note": {
                "deckName": settings.anki_deck_name,
                "modelName": ANKI_MODEL_NAME,
                "fields": {
                    "Front": german_phrase,
                    "Back": russian_translation,
                },
                "options": {"allowDuplicate": False},
                "tags": list(settings.anki_tags),
            }
        },
    }


async def add_flashcard(
    german_phrase: str,
    russian_translation: str,
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """Create one Basic note and return AnkiConnect's ``result`` (the note id)."""
    payload = build_add_note_request(german_phrase, russian_translation, settings)
    logger.info(f"Adding note to deck {settings.anki_deck_name!r}")

    try:
        try:
            async with httpx.AsyncClient(timeout=settings.upstream_timeout_sec, transport=transport) as client:
                resp = await client.post(settings.anki_connect_url, json=payload)
        except httpx.HTTPError as e:
            raise FlashcardServiceError(f"AnkiConnect unreachable: {e.__class__.__name__}: {e}") from e

        if resp.is_error:
            raise FlashcardServiceError(
                f"AnkiConnect returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                details={"body": resp.text[:1000]},
            )

        try:
            result = resp.json()
        except ValueError as e:
            raise FlashcardServiceError("AnkiConnect response is not JSON", details={"body": resp.text[:1000]}) from e

        if isinstance(result, dict) and result.get("error"):
            raise FlashcardServiceError(f"AnkiConnect error: {result['error']}", details={"error": result["error"]})
    except FlashcardServiceError as e:
        log_error(e, logger)
        raise

    return result.get("result") if isinstance(result, dict) else None
