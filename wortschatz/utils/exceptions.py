"""
Application-specific exception classes.

Every error carries an HTTP status and a public message that is safe to
return to the browser; diagnostic detail stays in ``details`` and the logs.
"""

import logging
from typing import Any, Dict, Optional


class WortschatzError(Exception):
    """Base exception class for Wortschatz application errors."""

    status_code: int = 500
    public_message: str = "Internal error"

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.public_message}


class InvalidInput(WortschatzError):
    """Raised when the client sends an unusable request body."""

    status_code = 400
    public_message = 'Invalid input: "word" and "context" must be non-empty strings'

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, error_code="INVALID_INPUT", **kwargs)
        self.field = field


class MisconfiguredService(WortschatzError):
    """Raised when a required setting (e.g. the provider API key) is missing."""

    public_message = "Analysis service is not configured"

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        super().__init__(message, error_code="MISCONFIGURED_SERVICE", **kwargs)
        self.config_key = config_key


class UpstreamError(WortschatzError):
    """Raised when the language model endpoint fails or answers non-2xx."""

    public_message = "Analysis service request failed"

    def __init__(
        self,
        message: str,
        service_name: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="UPSTREAM_ERROR", **kwargs)
        self.service_name = service_name
        self.upstream_status = status_code


class EmptyUpstreamResponse(WortschatzError):
    """Raised when the completion envelope carries no text."""

    public_message = "API response is missing expected content"

    def __init__(self, message: str, **kwargs):
        super().__init__(message, error_code="EMPTY_UPSTREAM_RESPONSE", **kwargs)


class MalformedAnalysis(WortschatzError):
    """Raised when model output is not a valid word analysis."""

    public_message = "Failed to parse analysis result"

    def __init__(self, message: str, raw: str = "", cleaned: str = "", **kwargs):
        super().__init__(message, error_code="MALFORMED_ANALYSIS", **kwargs)
        self.raw = raw
        self.cleaned = cleaned


class AnalysisFailed(WortschatzError):
    """Raised for unexpected failures inside the analysis flow."""

    public_message = "Analysis failed"

    def __init__(self, message: str, **kwargs):
        super().__init__(message, error_code="ANALYSIS_FAILED", **kwargs)

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.public_message}
        if self.details.get("type"):
            body["details"] = self.details["type"]
        return body


class FlashcardServiceError(WortschatzError):
    """Raised when AnkiConnect rejects or fails a note creation."""

    public_message = "Anki operation failed"

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        super().__init__(message, error_code="FLASHCARD_SERVICE_ERROR", **kwargs)
        self.upstream_status = status_code


def log_error(error: WortschatzError, logger=None, level: str = "error"):
    """
    Log a WortschatzError with structured information.

    Args:
        error: The error to log
        logger: Logger instance (uses default logger if None)
        level: Log level ("error", "warning", "info", "debug")
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    log_func = getattr(logger, level)
    log_func(
        f"{error.error_code}: {error.message}",
        extra={
            "error_code": error.error_code,
            "details": error.details,
            "context": {
                attr: getattr(error, attr, None)
                for attr in ["field", "config_key", "service_name", "upstream_status"]
                if hasattr(error, attr)
            },
        },
    )
