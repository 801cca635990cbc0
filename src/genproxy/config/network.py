"""Ledger endpoint configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final
from urllib.parse import urlsplit, urlunsplit

from .env import optional_env_var
from .errors import ConfigurationError, MissingConfigurationError, UnknownNetworkError
from .http_resilience import RateLimit, ResilienceConfig

RPC_URL_ENV: Final[str] = "GENPROXY_RPC_URL"
RPC_TIMEOUT_SECONDS: Final[float] = 30.0
SIMULATED_ENDPOINT: Final[str] = "http://localhost:8000"

NETWORK_RPC_URLS: Final[dict[str, str]] = {
    "dancelight": "wss://services.tanssi-testnet.network/dancelight",
    "tanssi": "wss://services.tanssi-mainnet.network/tanssi",
}
NETWORK_NAMES: Final[tuple[str, ...]] = tuple(NETWORK_RPC_URLS)

_SCHEME_MAP: Final[dict[str, str]] = {
    "ws": "http",
    "wss": "https",
    "http": "http",
    "https": "https",
}


@dataclass(frozen=True, slots=True)
class EndpointConfig:
    url: str
    network: str | None = None

    @property
    def is_simulated(self) -> bool:
        return self.url.rstrip("/") == SIMULATED_ENDPOINT

    def resilience(self) -> ResilienceConfig:
        return ResilienceConfig(
            name=self.network or "ledger-rpc",
            timeout_seconds=RPC_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10),
        )


def to_http_url(url: str) -> str:
    """Map a websocket endpoint to the HTTP JSON-RPC endpoint on the same host."""

    parts = urlsplit(url.strip())
    scheme = _SCHEME_MAP.get(parts.scheme.lower())
    if scheme is None or not parts.netloc:
        raise ConfigurationError(f"Unsupported endpoint URL: {url}", setting="--url")
    return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))


def resolve_endpoint(*, url: str | None = None, network: str | None = None) -> EndpointConfig:
    """Pick the RPC endpoint from ``url``, a known ``network`` or the environment."""

    if url and network:
        raise ConfigurationError(
            "Provide either --url or --network, not both", setting="--network"
        )
    if network is not None:
        known = NETWORK_RPC_URLS.get(network)
        if known is None:
            raise UnknownNetworkError(network, NETWORK_NAMES)
        return EndpointConfig(url=to_http_url(known), network=network)
    effective = url or optional_env_var(RPC_URL_ENV)
    if effective is None:
        raise MissingConfigurationError(
            "Missing connection info. Provide either --url or --network "
            f"({', '.join(NETWORK_NAMES)}), or set {RPC_URL_ENV}",
            setting=RPC_URL_ENV,
        )
    return EndpointConfig(url=to_http_url(effective))
