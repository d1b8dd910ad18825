# API module - Transport client for the Aurex dashboard API
# Bearer auth, JSON in and out, a single attempt per call

from .client import AurexClient

__all__ = ["AurexClient"]
