"""SCALE encoding of proxy reconciliation calls.

Layouts (``[pallet][call]`` prefix from the runtime call index table):

- ``proxy.add_proxy`` / ``proxy.remove_proxy``: delegate, ``ProxyType`` u8, delay u32
- ``utility.dispatch_as``: ``OriginCaller::system(RawOrigin::Signed(owner))``, call
- ``utility.batch_all``: compact length, calls
- ``sudo.sudo``: call
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cache
from typing import TYPE_CHECKING, Final

from scalecodec.base import RuntimeConfiguration
from scalecodec.type_registry import load_type_registry_preset

from genproxy.domain.proxies.operations import (
    AddDelegation,
    Batch,
    Privileged,
    RemoveDelegation,
    Scoped,
)

if TYPE_CHECKING:
    from genproxy.config.runtime import CallIndex, RuntimeCallIndices
    from genproxy.domain.proxies.operations import Call
    from genproxy.domain.types import AccountId, ProxyDefinition

_MULTI_ADDRESS_ID: Final[bytes] = b"\x00"
_COMPACT_TYPE: Final[str] = "Compact<u32>"
_U32_MAX: Final[int] = 2**32 - 1


class EncodingError(ValueError):
    """Raised when a call cannot be represented for the configured runtime."""


@cache
def _scale_runtime() -> RuntimeConfiguration:
    runtime = RuntimeConfiguration()
    runtime.update_type_registry(load_type_registry_preset("legacy"))
    return runtime


def encode_compact(value: int) -> bytes:
    if not 0 <= value <= _U32_MAX:
        raise EncodingError(f"compact length out of u32 range: {value}")
    scale_object = _scale_runtime().create_scale_object(_COMPACT_TYPE)
    return bytes(scale_object.encode(value).data)


def encode_u32(value: int) -> bytes:
    if not 0 <= value <= _U32_MAX:
        raise EncodingError(f"value does not fit u32: {value}")
    return value.to_bytes(4, "little")


@dataclass(slots=True, frozen=True)
class ScaleCallEncoder:
    indices: RuntimeCallIndices

    def encode(self, call: Call) -> bytes:
        match call:
            case AddDelegation(definition=definition):
                return self._proxy_call(self.indices.calls.add_proxy, definition)
            case RemoveDelegation(definition=definition):
                return self._proxy_call(self.indices.calls.remove_proxy, definition)
            case Scoped(owner=owner, call=inner):
                return (
                    self.indices.calls.dispatch_as.to_bytes()
                    + self._signed_origin(owner)
                    + self.encode(inner)
                )
            case Batch(calls=calls):
                return (
                    self.indices.calls.batch_all.to_bytes()
                    + encode_compact(len(calls))
                    + b"".join(self.encode(inner) for inner in calls)
                )
            case Privileged(call=inner):
                return self.indices.calls.sudo.to_bytes() + self.encode(inner)
        raise EncodingError(f"Unsupported call: {call!r}")

    def encode_hex(self, call: Call) -> str:
        return "0x" + self.encode(call).hex()

    def _signed_origin(self, owner: AccountId) -> bytes:
        return bytes((self.indices.system_origin, self.indices.signed_origin)) + owner.raw

    def _proxy_call(self, index: CallIndex, definition: ProxyDefinition) -> bytes:
        proxy_type = self.indices.proxy_type_index(definition.capability)
        if proxy_type is None:
            raise EncodingError(
                f"No ProxyType index configured for {definition.capability}"
            )
        delegate = definition.delegate.raw
        if self.indices.multi_address:
            delegate = _MULTI_ADDRESS_ID + delegate
        return index.to_bytes() + delegate + bytes((proxy_type,)) + encode_u32(definition.delay)
