"""
Agent Configuration
-------------------
API key and base URL for the Aurex dashboard API.

Rules:
- Secrets never in code
- Keys come from the caller, the environment, or a YAML file
- The full API key is never printed or logged
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union
import logging
import os

import yaml


DEFAULT_BASE_URL = "https://aurex.cash/api/dashboard"

API_KEY_ENV = "AUREX_API_KEY"
BASE_URL_ENV = "AUREX_BASE_URL"

_logger = logging.getLogger("aurex.config")


def mask_secret(value: Optional[str], visible: int = 4) -> str:
    """Mask a secret, keeping only its last few characters."""
    if not value:
        return "<unset>"
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]


@dataclass(frozen=True)
class AurexAgentConfig:
    """
    Immutable client configuration.

    Owned by the transport client for the lifetime of a tool registry.
    """
    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self):
        if not self.api_key:
            raise ValueError("api_key is required")
        # base_url=None means "use the production endpoint"
        if not self.base_url:
            object.__setattr__(self, "base_url", DEFAULT_BASE_URL)

    def __repr__(self) -> str:
        return f"AurexAgentConfig(api_key={mask_secret(self.api_key)}, base_url={self.base_url})"

    @classmethod
    def from_env(cls) -> "AurexAgentConfig":
        """Load configuration from AUREX_API_KEY / AUREX_BASE_URL."""
        api_key = os.getenv(API_KEY_ENV)
        if not api_key:
            raise ValueError(f"API key not found: {API_KEY_ENV}")
        return cls(api_key=api_key, base_url=os.getenv(BASE_URL_ENV) or DEFAULT_BASE_URL)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "AurexAgentConfig":
        """
        Load configuration from a YAML file.

        Accepts either top-level ``api_key``/``base_url`` keys or the same
        keys nested under an ``aurex`` section. Environment variables
        override file values.
        """
        config_path = Path(path)
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        if isinstance(data.get("aurex"), dict):
            data = data["aurex"]

        api_key = os.getenv(API_KEY_ENV) or data.get("api_key")
        base_url = os.getenv(BASE_URL_ENV) or data.get("base_url")

        if not api_key:
            raise ValueError(f"API key not found in {config_path} or {API_KEY_ENV}")

        _logger.info(f"Loaded config from {config_path}")
        return cls(api_key=api_key, base_url=base_url or DEFAULT_BASE_URL)

    @classmethod
    def coerce(cls, value: Union["AurexAgentConfig", Mapping[str, Any]]) -> "AurexAgentConfig":
        """Build a config from an instance or a ``{apiKey, baseUrl}`` mapping."""
        if isinstance(value, cls):
            return value

        api_key = value.get("api_key") or value.get("apiKey")
        base_url = value.get("base_url") or value.get("baseUrl")
        return cls(api_key=api_key, base_url=base_url or DEFAULT_BASE_URL)
