from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..deps import get_text_store, get_upstream_transport
from ..schemas import (
    AnalysisRequest,
    ErrorResponse,
    FlashcardRequest,
    FlashcardResponse,
    SavedTextRequest,
    SavedTextsResponse,
)
from ..services.analysis_service import analyze_word
from ..services.flashcard_service import add_flashcard
from ..services.text_store import TextStore
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])

_ERRORS = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.post("/analyze", responses=_ERRORS)
async def analyze(
    req: AnalysisRequest,
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> Dict[str, Any]:
    analysis = await analyze_word(req.word, req.context, settings, transport=transport)
    return analysis.model_dump()


@router.post("/anki", response_model=FlashcardResponse, responses={500: {"model": ErrorResponse}})
async def anki(
    req: FlashcardRequest,
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> FlashcardResponse:
    await add_flashcard(req.germanPhrase, req.russianTranslation, settings, transport=transport)
    return FlashcardResponse(success=True)


@router.get("/texts", response_model=SavedTextsResponse)
async def list_texts(store: TextStore = Depends(get_text_store)) -> SavedTextsResponse:
    return SavedTextsResponse(texts=store.texts)


@router.post("/texts", response_model=SavedTextsResponse, status_code=201, responses={400: {"model": ErrorResponse}})
async def create_text(req: SavedTextRequest, store: TextStore = Depends(get_text_store)):
    if not req.text.strip():
        return JSONResponse(status_code=400, content={"error": "Text must not be empty"})
    texts = store.add(req.text)
    logger.info(f"Saved text #{len(texts)}")
    return SavedTextsResponse(texts=texts)
