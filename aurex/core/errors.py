"""
Error Handling Module
---------------------
Typed error classification for tool executions.

Every failure is reported to the agent as a flat ``{success: False, error}``
envelope. Internally the failure keeps its category so logs can tell
"remote said no" apart from "could not reach remote".
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Optional
import json
import logging

import httpx


class ErrorCategory(Enum):
    """Categories of tool execution failures."""
    REMOTE_REJECTED = auto()  # Remote returned success=false
    NETWORK_ERROR = auto()    # Could not reach the remote service
    TIMEOUT_ERROR = auto()    # Transport-level timeout
    DECODE_ERROR = auto()     # Body was not a JSON object
    INPUT_ERROR = auto()      # Argument needed for the request was missing
    SYSTEM_ERROR = auto()     # Anything else


class UnexpectedResponseError(ValueError):
    """Remote body parsed as JSON but was not an object."""

    def __init__(self, body: Any):
        super().__init__(f"Unexpected response shape: {type(body).__name__}")
        self.body = body


@dataclass
class AurexError:
    """
    Structured failure with metadata.

    ``message`` is what ends up in the outer envelope's ``error`` field.
    """
    category: ErrorCategory
    message: str
    details: Optional[Dict[str, Any]] = None

    @property
    def is_remote(self) -> bool:
        return self.category == ErrorCategory.REMOTE_REJECTED

    @property
    def log_level(self) -> int:
        return logging.WARNING if self.is_remote else logging.ERROR

    @classmethod
    def remote(cls, message: Any, tool_name: str = "") -> "AurexError":
        """
        Create an error from a remote ``success: false`` envelope.

        Non-string error values (codes, objects) are rendered as JSON.
        """
        if message is None or message == "":
            message = "Request failed"
        elif not isinstance(message, str):
            message = json.dumps(message, default=str)
        return cls(
            category=ErrorCategory.REMOTE_REJECTED,
            message=message,
            details={"tool": tool_name},
        )

    def __repr__(self) -> str:
        return f"AurexError({self.category.name}: {self.message})"


def exception_message(exception: BaseException) -> str:
    """Message for the envelope; falls back to the class name when empty."""
    if isinstance(exception, KeyError) and exception.args:
        return f"Missing required parameter: {exception.args[0]}"
    return str(exception) or type(exception).__name__


def classify_exception(exception: Exception, tool_name: str = "") -> AurexError:
    """
    Convert any exception raised during a tool call to a classified AurexError.
    """
    if isinstance(exception, (httpx.TimeoutException, TimeoutError)):
        category = ErrorCategory.TIMEOUT_ERROR
    elif isinstance(exception, (httpx.TransportError, ConnectionError, OSError)):
        category = ErrorCategory.NETWORK_ERROR
    elif isinstance(exception, (json.JSONDecodeError, UnexpectedResponseError)):
        category = ErrorCategory.DECODE_ERROR
    elif isinstance(exception, KeyError):
        category = ErrorCategory.INPUT_ERROR
    else:
        category = ErrorCategory.SYSTEM_ERROR

    return AurexError(
        category=category,
        message=exception_message(exception),
        details={"tool": tool_name, "exception": type(exception).__name__},
    )
