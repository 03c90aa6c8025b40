from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Classification for error logging."""

    HANDLER = "handler"
    CONTRACT = "contract"


class DispatchError(Exception):
    """Base class for dispatcher contract violations."""

    category = ErrorCategory.CONTRACT


class InvalidTagError(DispatchError, ValueError):
    """Raised when a tag is ``None`` or cannot be hashed."""


class InvalidHandlerError(DispatchError, TypeError):
    """Raised when a handler is not callable."""


class InvalidEventError(DispatchError, TypeError):
    """Raised when an event is missing or carries no usable tag."""
