"""Ledger JSON-RPC adapter."""

from __future__ import annotations

from .client import SUDO_KEY_STORAGE_KEY, LedgerRPCError, RpcLedgerClient
from .schema import DryRunPayload, RpcResponse, RuntimeVersionPayload

__all__ = [
    "SUDO_KEY_STORAGE_KEY",
    "DryRunPayload",
    "LedgerRPCError",
    "RpcLedgerClient",
    "RpcResponse",
    "RuntimeVersionPayload",
]
