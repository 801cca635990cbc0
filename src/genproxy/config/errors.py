"""Errors raised while resolving settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class ConfigurationError(RuntimeError):
    """A setting was supplied but cannot be used.

    ``setting`` names the flag or environment variable at fault, when known.
    """

    def __init__(self, message: str, *, setting: str | None = None) -> None:
        super().__init__(message)
        self.setting = setting


class MissingConfigurationError(ConfigurationError):
    """Neither the command line nor the environment provides a required setting."""


class UnknownNetworkError(ConfigurationError):
    def __init__(self, network: str, known: Sequence[str]) -> None:
        super().__init__(
            f"Unknown network {network!r}; known networks: {', '.join(known)}",
            setting="--network",
        )
        self.network = network
        self.known = tuple(known)
