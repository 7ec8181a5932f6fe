"""
Pydantic models for LLM response validation.

Provides structured validation for word analyses so partially-formed
records never reach the reading surface.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator


class ExampleSentence(BaseModel):
    """One German example sentence with its Russian translation."""

    model_config = ConfigDict(extra="allow")

    german: str
    russian: str

    @field_validator("german", "russian")
    @classmethod
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Example sentence cannot be empty")
        return v


class WordAnalysis(BaseModel):
    """Grammar notes (HTML fragment) plus one example pair for a clicked word."""

    model_config = ConfigDict(extra="allow")

    grammarDetailsAndUsage: str
    example: ExampleSentence

    @field_validator("grammarDetailsAndUsage")
    @classmethod
    def validate_details(cls, v):
        if not v or not v.strip():
            raise ValueError("Grammar details cannot be empty")
        return v


def describe_validation_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into ``[{"field": "example.german", "message": ...}]``."""
    out: List[Dict[str, Any]] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        out.append({"field": loc or "<root>", "message": err.get("msg", "invalid")})
    return out
