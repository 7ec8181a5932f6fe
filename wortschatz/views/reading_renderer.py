from __future__ import annotations

"""
HTML renderer for the reading page fragments.

Only concerns markup assembly; no storage or network logic. Fragments carry
stable ids so HTMX can swap them independently.
"""

import json
from typing import Optional

from markupsafe import escape

from ..services.reading_session import Notification, ReadingSession
from ..utils.llm_validation import WordAnalysis
from ..utils.sanitize import sanitize_html
from ..utils.text_segmentation import tokenize_for_display

_NOTIFICATION_CLASSES = {
    "error": "bg-red-50 text-red-900",
    "success": "bg-green-50 text-green-900",
    "info": "bg-blue-50 text-blue-900",
}


def _attr_json(data: dict) -> str:
    return str(escape(json.dumps(data, ensure_ascii=False)))


def _speak_button(text: str, label: str, speech_lang: str, speech_rate: float) -> str:
    return (
        '<button type="button" class="read-aloud px-3 py-1.5 rounded-lg border border-gray-300 text-sm"'
        f' data-speak="{escape(text)}" data-lang="{escape(speech_lang)}" data-rate="{speech_rate}">'
        f'&#9654; {escape(label)}</button>'
    )


def render_notification(notification: Optional[Notification], *, ttl_sec: float = 3.0, oob: bool = False) -> str:
    """Banner with a close button. Non-error banners re-poll once their TTL has passed."""
    oob_attr = ' hx-swap-oob="true"' if oob else ""
    if notification is None:
        return f'<div id="notification"{oob_attr}></div>'

    classes = _NOTIFICATION_CLASSES.get(notification.kind, _NOTIFICATION_CLASSES["info"])
    expiry = ""
    if not notification.sticky:
        delay_ms = max(0, int(ttl_sec * 1000))
        expiry = (
            f' hx-get="/ui/notification" hx-trigger="load delay:{delay_ms}ms"'
            ' hx-swap="outerHTML"'
        )
    return (
        f'<div id="notification"{oob_attr}{expiry} role="status" data-kind="{escape(notification.kind)}"'
        f' class="mb-4 p-4 rounded {classes}">'
        '<div class="flex justify-between items-center">'
        f'<span>{escape(notification.message)}</span>'
        '<button type="button" class="px-2 text-sm" aria-label="Close"'
        ' hx-post="/ui/notification/dismiss" hx-target="#notification" hx-swap="outerHTML">&times;</button>'
        '</div>'
        '</div>'
    )


def render_reading_block(text: Optional[str], text_index: Optional[int], *, speech_lang: str, speech_rate: float) -> str:
    """Selected text with every word as an analysis click target."""
    if text is None or text_index is None:
        return '<div id="reading-block"></div>'

    lines_html = []
    for tokens in tokenize_for_display(text):
        spans = "".join(
            '<span class="word cursor-pointer hover:bg-blue-100 px-1 rounded"'
            ' hx-post="/ui/analyze" hx-target="#analysis-panel" hx-swap="outerHTML"'
            ' hx-indicator="#analysis-loading"'
            f" hx-vals='{_attr_json({'word': tok.surface, 'text_index': text_index})}'>"
            f"{escape(tok.surface)} </span>"
            for tok in tokens
        )
        lines_html.append(f"<div>{spans or '&nbsp;'}</div>")

    return (
        f'<div id="reading-block" class="mt-4 p-4 rounded-lg border bg-white" data-text-index="{text_index}">'
        '<div class="text-lg whitespace-pre-wrap">'
        + "".join(lines_html)
        + '</div>'
        + '<div class="mt-2">'
        + _speak_button(text, "Read Aloud", speech_lang, speech_rate)
        + '</div>'
        + '</div>'
    )


def render_analysis_body(analysis: WordAnalysis, *, speech_lang: str, speech_rate: float) -> str:
    example = analysis.example
    return (
        '<div class="space-y-2">'
        '<div class="prose prose-sm max-w-none text-gray-800 leading-relaxed">'
        f'{sanitize_html(analysis.grammarDetailsAndUsage)}'
        '</div>'
        '<div class="mt-4">'
        '<h4 class="font-semibold mb-2">Example:</h4>'
        '<div class="bg-white p-2 rounded mb-2">'
        f'<p class="example-german">{escape(example.german)}</p>'
        f'<p class="example-russian text-gray-600">{escape(example.russian)}</p>'
        '<div class="flex space-x-2 mt-2">'
        '<button type="button" class="px-3 py-1.5 rounded-lg border border-gray-300 text-sm"'
        ' hx-post="/ui/anki" hx-target="#notification" hx-swap="outerHTML">Save to Anki</button>'
        + _speak_button(example.german, "Read", speech_lang, speech_rate)
        + '</div>'
        '</div>'
        '</div>'
        '</div>'
    )


def render_analysis_panel(session: ReadingSession, *, speech_lang: str, speech_rate: float) -> str:
    """Analysis card: spinner while the newest request runs, else the current analysis."""
    in_flight = " htmx-request" if session.is_loading else ""
    spinner = (
        f'<div id="analysis-loading" class="htmx-indicator flex items-center justify-center p-4{in_flight}">'
        '<div class="animate-spin rounded-full h-8 w-8 border-b-2 border-gray-900"></div>'
        '</div>'
    )
    if session.analysis is None and not session.is_loading:
        return f'<div id="analysis-panel">{spinner}</div>'

    word = (
        f'<h3 class="text-lg font-semibold mb-2">{escape(session.selected_word)}</h3>'
        if session.selected_word
        else ""
    )
    body = (
        render_analysis_body(session.analysis, speech_lang=speech_lang, speech_rate=speech_rate)
        if session.analysis is not None and not session.is_loading
        else ""
    )
    return (
        '<div id="analysis-panel" class="mt-4 p-4 rounded-lg border bg-gray-50">'
        + spinner
        + word
        + body
        + '</div>'
    )


def render_add_text_dialog(is_open: bool) -> str:
    if not is_open:
        return '<div id="add-text-dialog"></div>'
    return (
        '<div id="add-text-dialog" class="fixed inset-0 bg-black/40 flex items-center justify-center" role="dialog" aria-modal="true">'
        '<div class="bg-white rounded-lg p-6 w-full max-w-md">'
        '<div class="flex justify-between items-center mb-4">'
        '<h2 class="text-xl font-semibold">Add New Text</h2>'
        '<button type="button" aria-label="Close" hx-post="/ui/add-text/close"'
        ' hx-target="#add-text-dialog" hx-swap="outerHTML">&times;</button>'
        '</div>'
        '<form method="post" action="/texts" class="grid gap-4">'
        '<textarea name="text" rows="5" placeholder="Enter your text here..."'
        ' class="w-full p-2 border rounded-md font-mono whitespace-pre-wrap"></textarea>'
        '<button type="submit" class="px-4 py-2 rounded-lg text-white bg-blue-600">Save Text</button>'
        '</form>'
        '</div>'
        '</div>'
    )
