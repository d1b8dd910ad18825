"""
Result Envelope
---------------
The uniform ``{success, data?, error?}`` shape every tool returns.

Invariant: a successful result carries no ``error`` key, a failed one
carries no ``data`` key and always has an error message.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, model_validator

from .errors import AurexError, UnexpectedResponseError


class RemoteEnvelope(BaseModel):
    """Body returned by the dashboard API. ``data`` is passed through as-is."""
    success: bool = False
    data: Any = None
    error: Any = None  # usually a string; codes and objects pass through

    @classmethod
    def parse(cls, body: Any) -> "RemoteEnvelope":
        if not isinstance(body, dict):
            raise UnexpectedResponseError(body)
        # No validation of the payload; the remote shape is trusted
        return cls.model_construct(
            success=bool(body.get("success")),
            data=body.get("data"),
            error=body.get("error"),
        )


class ToolResult(BaseModel):
    """Result of one tool execution."""
    success: bool
    data: Any = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_invariant(self) -> "ToolResult":
        if self.success and self.error is not None:
            raise ValueError("successful result cannot carry an error")
        if not self.success and not self.error:
            raise ValueError("failed result requires an error message")
        return self

    @classmethod
    def ok(cls, data: Any) -> "ToolResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: AurexError) -> "ToolResult":
        return cls(success=False, error=error.message)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error}
