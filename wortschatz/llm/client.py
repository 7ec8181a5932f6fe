from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..utils.exceptions import EmptyUpstreamResponse, UpstreamError

logger = logging.getLogger(__name__)

SERVICE_NAME = "llm"


def extract_completion_text(resp_dict: Any) -> Optional[str]:
    """Return ``choices[0].text`` or ``choices[0].message.content``, whichever is set."""
    if not isinstance(resp_dict, dict):
        return None
    choices = resp_dict.get("choices")
    if not isinstance(choices, list) or len(choices) == 0:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None

    text = first.get("text")
    if isinstance(text, str) and text:
        return text

    msg = first.get("message")
    if isinstance(msg, dict):
        content = msg.get("content")
        if isinstance(content, str) and content:
            return content
    return None


async def chat_complete(
    messages: List[Dict[str, str]],
    *,
    api_key: str,
    base_url: str,
    model: str,
    temperature: float,
    max_tokens: int,
    timeout: float = 60.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Call an OpenAI-compatible chat completion endpoint and return the text.

    Raises UpstreamError for transport failures and non-2xx answers, and
    EmptyUpstreamResponse when the envelope has no completion text.
    """
    url = f"{base_url.rstrip('/')}/chat/completions"
    data = {
        "model": model,
        "messages": messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    logger.info(f"Calling LLM API with model: {model}, messages count: {len(messages)}")
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Request data: {json.dumps(data, ensure_ascii=False)[:500]}")

    try:
        async with httpx.AsyncClient(timeout=float(timeout), transport=transport) as client:
            resp = await client.post(url, json=data, headers=headers)
    except httpx.HTTPError as e:
        raise UpstreamError(
            f"LLM request failed: {e.__class__.__name__}: {e}",
            service_name=SERVICE_NAME,
        ) from e

    if resp.is_error:
        try:
            error_body: Any = resp.json()
        except ValueError:
            error_body = resp.text[:1000]
        logger.error(
            f"LLM API error: status={resp.status_code} reason={resp.reason_phrase} body={error_body}"
        )
        raise UpstreamError(
            f"LLM API returned HTTP {resp.status_code}",
            service_name=SERVICE_NAME,
            status_code=resp.status_code,
            details={"reason": resp.reason_phrase, "body": error_body},
        )

    try:
        resp_dict = resp.json()
    except ValueError as e:
        raise EmptyUpstreamResponse(
            "LLM API response is not JSON",
            details={"body": resp.text[:1000]},
        ) from e

    content = extract_completion_text(resp_dict)
    if not content:
        logger.error(f"Invalid response structure: {str(resp_dict)[:1000]}")
        raise EmptyUpstreamResponse(
            "LLM API response is missing expected content",
            details={"body": resp_dict},
        )
    return content
