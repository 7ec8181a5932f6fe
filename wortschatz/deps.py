from __future__ import annotations

from typing import Optional

import httpx
from fastapi import Request

from .services.reading_session import ReadingSession
from .services.text_store import TextStore


def get_upstream_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for outbound calls; None means httpx's default network transport."""
    return None


def get_text_store(request: Request) -> TextStore:
    return request.app.state.text_store


def get_reading_session(request: Request) -> ReadingSession:
    return request.app.state.reading_session
