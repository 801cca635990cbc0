"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError, MissingConfigurationError, UnknownNetworkError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .network import (
    NETWORK_NAMES,
    NETWORK_RPC_URLS,
    SIMULATED_ENDPOINT,
    EndpointConfig,
    resolve_endpoint,
    to_http_url,
)
from .runtime import CallIndex, CallTable, RuntimeCallIndices, load_call_indices, parse_call_indices

__all__ = [
    "NETWORK_NAMES",
    "NETWORK_RPC_URLS",
    "SIMULATED_ENDPOINT",
    "CallIndex",
    "CallTable",
    "ConfigurationError",
    "EndpointConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "RuntimeCallIndices",
    "UnknownNetworkError",
    "configure_logging",
    "load_call_indices",
    "optional_env_var",
    "parse_call_indices",
    "resolve_endpoint",
    "to_http_url",
]
