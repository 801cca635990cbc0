"""Core domain types for genesis proxy configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final

ACCOUNT_ID_LENGTH: Final[int] = 32
MAX_DELAY: Final[int] = 2**32 - 1


@dataclass(frozen=True, slots=True)
class AccountId:
    """Decoded 32-byte account identifier.

    ``address`` keeps the text the account was read from and is ignored for
    equality, hashing and ordering: two encodings of the same key are the same
    account.
    """

    raw: bytes
    address: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if len(self.raw) != ACCOUNT_ID_LENGTH:
            raise ValueError(f"account id must be {ACCOUNT_ID_LENGTH} bytes, got {len(self.raw)}")

    @property
    def hex(self) -> str:
        return "0x" + self.raw.hex()

    def __lt__(self, other: AccountId) -> bool:
        return self.hex < other.hex

    def __str__(self) -> str:
        return self.address or self.hex


class CapabilityTag(StrEnum):
    """Closed vocabulary of proxy types."""

    ANY = "Any"
    NON_TRANSFER = "NonTransfer"
    GOVERNANCE = "Governance"
    STAKING = "Staking"
    IDENTITY_JUDGEMENT = "IdentityJudgement"
    CANCEL_PROXY = "CancelProxy"
    AUCTION = "Auction"
    SOCIETY = "Society"
    NOMINATION_POOLS = "NominationPools"
    FAST_GOVERNANCE = "FastGovernance"
    ETHEREUM_BRIDGE = "EthereumBridge"
    ASSETS = "Assets"


@dataclass(frozen=True, slots=True)
class ProxyDefinition:
    """The ``(delegate, capability, delay)`` triple held for one owner."""

    delegate: AccountId
    capability: CapabilityTag
    delay: int

    def __str__(self) -> str:
        return f"{self.delegate} ({self.capability}, delay={self.delay})"


@dataclass(frozen=True, slots=True, kw_only=True)
class DelegationRow:
    """One validated row of a proxy configuration source."""

    owner: AccountId
    delegate: AccountId
    capability: CapabilityTag
    delay: int
    line: int | None = field(default=None, compare=False)

    @property
    def definition(self) -> ProxyDefinition:
        return ProxyDefinition(delegate=self.delegate, capability=self.capability, delay=self.delay)


type ConfigurationMapping = Mapping[AccountId, ProxyDefinition]
