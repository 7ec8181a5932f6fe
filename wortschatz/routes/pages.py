from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..deps import get_reading_session
from ..services.reading_session import ReadingSession
from ..settings import Settings, get_settings
from ..utils.text_segmentation import preview
from ..views.reading_renderer import (
    render_add_text_dialog,
    render_analysis_panel,
    render_notification,
    render_reading_block,
)

router = APIRouter(tags=["pages"])

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
_templates_env: Optional[Jinja2Templates] = None


def _templates() -> Jinja2Templates:
    global _templates_env
    if _templates_env is None:
        env = Environment(
            loader=FileSystemLoader([str(TEMPLATES_DIR)]),
            autoescape=select_autoescape(["html", "xml"]),
        )
        _templates_env = Jinja2Templates(env=env)
    return _templates_env


@router.get("/", response_class=HTMLResponse)
async def reader_page(
    request: Request,
    session: ReadingSession = Depends(get_reading_session),
    settings: Settings = Depends(get_settings),
):
    """Saved texts, the open text with clickable words, and the analysis card."""
    t = _templates()
    speech = {"speech_lang": settings.speech_lang, "speech_rate": settings.speech_rate}
    context = {
        "title": "Language Learning Assistant",
        "texts": [
            {"index": i, "preview": preview(text), "selected": i == session.selected_index}
            for i, text in enumerate(session.texts)
        ],
        "notification_html": render_notification(
            session.current_notification(), ttl_sec=settings.notification_ttl_sec
        ),
        "dialog_html": render_add_text_dialog(session.is_adding_new),
        "reading_html": render_reading_block(session.selected_text, session.selected_index, **speech),
        "analysis_html": render_analysis_panel(session, **speech),
    }
    return t.TemplateResponse(request, "pages/reader.html", context)


@router.get("/texts/{index}")
async def select_text(index: int, session: ReadingSession = Depends(get_reading_session)):
    if not session.select_text(index):
        session.notify("Text not found", "error")
    return RedirectResponse(url="/", status_code=303)


@router.post("/texts")
async def save_text(text: str = Form(""), session: ReadingSession = Depends(get_reading_session)):
    session.save_new_text(text)
    return RedirectResponse(url="/", status_code=303)
