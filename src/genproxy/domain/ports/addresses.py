"""Port for turning address text into account ids."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from genproxy.domain.types import AccountId


@runtime_checkable
class AddressDecoder(Protocol):
    """Decode ``text`` or raise ``ValueError``; there is no partial validity."""

    def __call__(self, text: str) -> AccountId: ...


__all__ = ["AddressDecoder"]
