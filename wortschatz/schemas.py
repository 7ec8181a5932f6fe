"""Request and response schemas for the JSON API."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class AnalysisRequest(BaseModel):
    """Validated in the service layer so bad values map to a 400, not a 422."""

    word: Any = Field(None, description="Word as clicked in the text")
    context: Any = Field(None, description="The whole text the word appears in")


class FlashcardRequest(BaseModel):
    germanPhrase: str = Field(..., description="Card front")
    russianTranslation: str = Field(..., description="Card back")


class FlashcardResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human-readable error message")
    details: Optional[str] = Field(None, description="Error type for unexpected failures")


class SavedTextRequest(BaseModel):
    text: str


class SavedTextsResponse(BaseModel):
    texts: List[str] = Field(default_factory=list)
