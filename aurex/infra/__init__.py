# Infrastructure module - Logging
# Console through Rich, structured JSON file output, call_id propagation

from .logging import (
    get_logger, configure_logging, CallContext,
    get_call_id, generate_call_id
)

__all__ = [
    "get_logger", "configure_logging", "CallContext",
    "get_call_id", "generate_call_id",
]
