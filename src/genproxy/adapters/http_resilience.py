"""Rate-limited, retrying async HTTP client for JSON-RPC endpoints."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import Retry, RetryTransport

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from genproxy.config.http_resilience import ResilienceConfig, RetryPolicy

log = getLogger(__name__)


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.attempts,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        allowed_methods=("POST",),
        status_forcelist=tuple(sorted(policy.statuses)),
        retry_on_exceptions=policy.exceptions,
    )


class ResilientClient:
    """``httpx.AsyncClient`` behind a retry transport and an optional rate limit.

    Meant for a single ``async with`` block: the connection pool is closed on
    exit.
    """

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit is not None
            else None
        )
        self._client = httpx.AsyncClient(
            timeout=config.timeout_seconds,
            transport=RetryTransport(retry=build_retry(config.retry)),
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def post_json(self, url: str, payload: Mapping[str, object]) -> httpx.Response:
        log.debug("%s: POST %s", self.config.name, url)
        if self._limiter is None:
            return await self._client.post(url, json=payload)
        async with self._limiter:
            return await self._client.post(url, json=payload)
