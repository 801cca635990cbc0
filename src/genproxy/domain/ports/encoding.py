"""Port for serialising assembled calls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from genproxy.domain.proxies.operations import Call


@runtime_checkable
class CallEncoder(Protocol):
    """Encode a call tree into the opaque bytes consumed by signing/broadcast."""

    def encode(self, call: Call) -> bytes: ...


__all__ = ["CallEncoder"]
