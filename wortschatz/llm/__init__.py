"""
LLM module - API client and prompt building for word analysis.
"""

from .client import chat_complete, extract_completion_text
from .prompts import build_word_analysis_prompt

__all__ = [
    "chat_complete",
    "extract_completion_text",
    "build_word_analysis_prompt",
]
