"""Exception hierarchy for docprocessor.

Every failure of a submission attempt is one of these; the orchestrator folds
them into the workflow state so callers only ever see a single message.
"""
from __future__ import annotations

from typing import Optional


FALLBACK_ERROR_MESSAGE = "Upload failed"


class DocumentProcessingError(Exception):
    """Base class for submission failures."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DocumentProcessingError):
    """Raised when user input is invalid. Never reaches the network layer."""

    kind = "validation"


class ApplicationError(DocumentProcessingError):
    """Raised when the processing endpoint reports a structured failure."""

    kind = "application"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(DocumentProcessingError):
    """Raised on network failure, timeout or an error status without a structured error."""

    kind = "transport"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or FALLBACK_ERROR_MESSAGE)
        self.status_code = status_code


__all__ = [
    "FALLBACK_ERROR_MESSAGE",
    "DocumentProcessingError",
    "ValidationError",
    "ApplicationError",
    "TransportError",
]
