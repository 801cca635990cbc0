from __future__ import annotations

from typing import TYPE_CHECKING

from genproxy.domain.types import AccountId, CapabilityTag, ProxyDefinition

if TYPE_CHECKING:
    from collections.abc import Iterable

HEADER = "Genesis Account,Proxy Account,Proxy Type,Delay"


def hex_address(seed: int) -> str:
    return "0x" + f"{seed:02x}" * 32


def account(seed: int) -> AccountId:
    return AccountId(raw=bytes((seed,)) * 32, address=hex_address(seed))


def definition(
    delegate_seed: int,
    capability: CapabilityTag = CapabilityTag.ANY,
    delay: int = 0,
) -> ProxyDefinition:
    return ProxyDefinition(delegate=account(delegate_seed), capability=capability, delay=delay)


def csv_text(rows: Iterable[tuple[str, str, str, str]], *, header: str = HEADER) -> str:
    lines = [header, *(",".join(row) for row in rows)]
    return "\n".join(lines) + "\n"


def csv_row(
    owner_seed: int,
    delegate_seed: int,
    capability: str = "Any",
    delay: str = "0",
) -> tuple[str, str, str, str]:
    return (hex_address(owner_seed), hex_address(delegate_seed), capability, delay)
