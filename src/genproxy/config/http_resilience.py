"""Retry and rate-limit settings for the ledger JSON-RPC client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

import httpx

RETRY_STATUSES: Final[frozenset[int]] = frozenset({429, 502, 503, 504})


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Transport-level retries for JSON-RPC POSTs.

    Every method the client issues is read-only on the endpoint, so a POST
    may be repeated.
    """

    attempts: int = 3
    backoff_factor: float = 0.5
    max_backoff_wait: float = 10.0
    statuses: frozenset[int] = RETRY_STATUSES
    exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float = 1.0


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
