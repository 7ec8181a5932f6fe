from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse

from ..deps import get_reading_session, get_upstream_transport
from ..services.analysis_service import analyze_word
from ..services.flashcard_service import add_flashcard
from ..services.reading_session import ReadingSession
from ..settings import Settings, get_settings
from ..views.reading_renderer import (
    render_add_text_dialog,
    render_analysis_panel,
    render_notification,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ui", tags=["ui"])


def _notification_html(session: ReadingSession, settings: Settings, *, oob: bool = False) -> str:
    return render_notification(
        session.current_notification(),
        ttl_sec=settings.notification_ttl_sec,
        oob=oob,
    )


@router.post("/analyze", response_class=HTMLResponse)
async def analyze_html(
    word: str = Form(...),
    text_index: int = Form(...),
    session: ReadingSession = Depends(get_reading_session),
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
):
    """HTMX: Analyze a clicked word against the whole text it belongs to."""
    context = session.store.get(text_index)
    if context is None:
        session.notify("Text not found", "error")
        return HTMLResponse(
            render_analysis_panel(session, speech_lang=settings.speech_lang, speech_rate=settings.speech_rate)
            + _notification_html(session, settings, oob=True)
        )

    async def _analyzer(w: str, c: str):
        return await analyze_word(w, c, settings, transport=transport)

    applied = await session.run_analysis(word, context, _analyzer)
    if not applied:
        # A newer click owns the panel; leave the client's DOM alone.
        return HTMLResponse("", headers={"HX-Reswap": "none"})

    return HTMLResponse(
        render_analysis_panel(session, speech_lang=settings.speech_lang, speech_rate=settings.speech_rate)
        + _notification_html(session, settings, oob=True)
    )


@router.post("/anki", response_class=HTMLResponse)
async def anki_html(
    session: ReadingSession = Depends(get_reading_session),
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
):
    """HTMX: Export the current example sentence as an Anki card."""

    async def _exporter(front: str, back: str):
        return await add_flashcard(front, back, settings, transport=transport)

    await session.export_example(_exporter)
    return HTMLResponse(_notification_html(session, settings))


@router.post("/notify", response_class=HTMLResponse)
async def notify_html(
    kind: str = Form("error"),
    message: Optional[str] = Form(None),
    session: ReadingSession = Depends(get_reading_session),
    settings: Settings = Depends(get_settings),
):
    """HTMX: Client-side failures (speech synthesis) reported back as a banner."""
    if kind == "speech":
        session.speech_failed()
    else:
        session.notify(message or "Something went wrong", kind)
    return HTMLResponse(_notification_html(session, settings))


@router.get("/notification", response_class=HTMLResponse)
async def notification_html(
    session: ReadingSession = Depends(get_reading_session),
    settings: Settings = Depends(get_settings),
):
    return HTMLResponse(_notification_html(session, settings))


@router.post("/notification/dismiss", response_class=HTMLResponse)
async def dismiss_notification_html(
    session: ReadingSession = Depends(get_reading_session),
    settings: Settings = Depends(get_settings),
):
    session.dismiss_notification()
    return HTMLResponse(_notification_html(session, settings))


@router.post("/add-text/open", response_class=HTMLResponse)
async def open_add_text_html(session: ReadingSession = Depends(get_reading_session)):
    session.open_add_text()
    return HTMLResponse(render_add_text_dialog(session.is_adding_new))


@router.post("/add-text/close", response_class=HTMLResponse)
async def close_add_text_html(session: ReadingSession = Depends(get_reading_session)):
    session.close_add_text()
    return HTMLResponse(render_add_text_dialog(session.is_adding_new))
