"""Pydantic models describing the ledger JSON-RPC payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RpcBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RpcErrorPayload(RpcBaseModel):
    code: int
    message: str
    data: object | None = None


class RpcResponse(RpcBaseModel):
    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: object | None = None
    error: RpcErrorPayload | None = None


class RuntimeVersionPayload(RpcBaseModel):
    spec_name: str = Field(alias="specName")
    spec_version: int = Field(alias="specVersion")
    transaction_version: int | None = Field(default=None, alias="transactionVersion")


class StorageDiffEntry(RpcBaseModel):
    key: str
    value: str | None = None

    @classmethod
    def from_pair(cls, pair: object) -> StorageDiffEntry:
        if isinstance(pair, list | tuple) and len(pair) == 2:
            key, value = pair
            return cls(key=str(key), value=None if value is None else str(value))
        return cls.model_validate(pair)


class DryRunPayload(RpcBaseModel):
    outcome: str
    storage_diff: list[object] = Field(default_factory=list, alias="storageDiff")

    def diff_entries(self) -> list[StorageDiffEntry]:
        return [StorageDiffEntry.from_pair(pair) for pair in self.storage_diff]
