# Core module - Error classification and the result envelope
# Every failure is reported as data, never raised across the tool boundary

from .errors import (
    AurexError, ErrorCategory, UnexpectedResponseError,
    classify_exception, exception_message
)
from .envelope import RemoteEnvelope, ToolResult

__all__ = [
    "AurexError", "ErrorCategory", "UnexpectedResponseError",
    "classify_exception", "exception_message",
    "RemoteEnvelope", "ToolResult",
]
