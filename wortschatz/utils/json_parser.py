"""
JSON parsing utilities for LLM responses.
"""

import json
import re
from typing import Any, Dict, List

from pydantic import ValidationError

from .exceptions import MalformedAnalysis
from .llm_validation import WordAnalysis, describe_validation_errors

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?[ \t]*\r?\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\r?\n?```\s*$")

REQUIRED_FIELDS = ("grammarDetailsAndUsage", "example")


def strip_code_fence(text: str) -> str:
    """Remove a leading ```/```json marker and a trailing ``` marker, then trim."""
    if not text:
        return ""
    s = _LEADING_FENCE.sub("", text, count=1)
    s = _TRAILING_FENCE.sub("", s, count=1)
    return s.strip()


def parse_word_analysis(content: str) -> WordAnalysis:
    """
    Parse model output into a validated WordAnalysis.

    Args:
        content: Raw completion text, possibly wrapped in a markdown fence

    Returns:
        The validated analysis

    Raises:
        MalformedAnalysis: if the text is not JSON, is not an object, or any
            required field is missing, empty or of the wrong type. ``details``
            lists every offending field.
    """
    cleaned = strip_code_fence(content or "")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedAnalysis(
            f"Response is not valid JSON: {e}",
            raw=content,
            cleaned=cleaned,
            details={"errors": [{"field": "<root>", "message": str(e)}]},
        ) from e

    if not isinstance(data, dict):
        raise MalformedAnalysis(
            "Response is not a JSON object",
            raw=content,
            cleaned=cleaned,
            details={"errors": [{"field": "<root>", "message": f"expected object, got {type(data).__name__}"}]},
        )

    errors: List[Dict[str, Any]] = [
        {"field": key, "message": "missing or empty"}
        for key in REQUIRED_FIELDS
        if not data.get(key)
    ]

    try:
        analysis = WordAnalysis.model_validate(data)
    except ValidationError as e:
        seen = {err["field"] for err in errors}
        errors.extend(err for err in describe_validation_errors(e) if err["field"] not in seen)
        analysis = None

    if errors or analysis is None:
        fields = ", ".join(err["field"] for err in errors)
        raise MalformedAnalysis(
            f"Response is missing or has invalid fields: {fields}",
            raw=content,
            cleaned=cleaned,
            details={"errors": errors},
        )

    return analysis
