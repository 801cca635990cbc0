"""Port for talking to a ledger endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from genproxy.domain.types import AccountId


@dataclass(slots=True, frozen=True)
class RuntimeVersion:
    spec_name: str
    spec_version: int


@dataclass(slots=True, frozen=True)
class DryRunReport:
    """Outcome of executing an encoded call on a simulated endpoint."""

    outcome: str
    storage_changes: int

    @property
    def succeeded(self) -> bool:
        # ApplyExtrinsicResult: Ok(Ok(())) encodes as 0x0000
        return self.outcome.startswith("0x0000")


@runtime_checkable
class LedgerClient(Protocol):
    def runtime_version(self) -> RuntimeVersion: ...

    def privileged_key(self) -> AccountId | None: ...

    def dry_run(self, call: bytes, *, signer: AccountId) -> DryRunReport: ...


__all__ = ["DryRunReport", "LedgerClient", "RuntimeVersion"]
