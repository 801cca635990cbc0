"""Domain port definitions for adapters."""

from __future__ import annotations

from .addresses import AddressDecoder
from .encoding import CallEncoder
from .ledger import DryRunReport, LedgerClient, RuntimeVersion

__all__ = [
    "AddressDecoder",
    "CallEncoder",
    "DryRunReport",
    "LedgerClient",
    "RuntimeVersion",
]
