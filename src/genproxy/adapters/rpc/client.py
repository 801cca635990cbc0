"""JSON-RPC client for a ledger node or a simulated fork endpoint."""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from genproxy.adapters.http_resilience import ResilientClient
from genproxy.adapters.ss58 import encode_address
from genproxy.domain.ports import DryRunReport, RuntimeVersion
from genproxy.domain.types import ACCOUNT_ID_LENGTH, AccountId

from .schema import DryRunPayload, RpcResponse, RuntimeVersionPayload

if TYPE_CHECKING:
    from collections.abc import Callable

    from genproxy.config.http_resilience import ResilienceConfig
    from genproxy.config.network import EndpointConfig
    from genproxy.domain.ports import LedgerClient

log = getLogger(__name__)

# twox128("Sudo") ++ twox128("Key")
SUDO_KEY_STORAGE_KEY: Final[str] = (
    "0x5c0d1176a568c1f92944340dbfed9e9c530ebca703c85910e7164cb7d1c9e47b"
)


class LedgerRPCError(RuntimeError):
    """Raised when the endpoint returns a JSON-RPC error or an unexpected payload."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class RpcLedgerClient:
    endpoint: EndpointConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _ids: itertools.count[int] = field(default_factory=lambda: itertools.count(1), repr=False)

    def runtime_version(self) -> RuntimeVersion:
        payload = RuntimeVersionPayload.model_validate(self._call("state_getRuntimeVersion", []))
        return RuntimeVersion(spec_name=payload.spec_name, spec_version=payload.spec_version)

    def privileged_key(self) -> AccountId | None:
        result = self._call("state_getStorage", [SUDO_KEY_STORAGE_KEY])
        if result is None:
            return None
        if not isinstance(result, str):
            raise LedgerRPCError(f"Unexpected storage value: {result!r}")
        raw = bytes.fromhex(result.removeprefix("0x"))
        if len(raw) != ACCOUNT_ID_LENGTH:
            raise LedgerRPCError(f"Sudo key has {len(raw)} bytes, expected {ACCOUNT_ID_LENGTH}")
        return AccountId(raw=raw)

    def dry_run(self, call: bytes, *, signer: AccountId) -> DryRunReport:
        """Execute ``call`` on a simulated endpoint as if ``signer`` signed it."""

        address = signer.address or encode_address(signer.raw)
        params = {"raw": False, "extrinsic": {"call": "0x" + call.hex(), "address": address}}
        payload = DryRunPayload.model_validate(self._call("dev_dryRun", [params]))
        return DryRunReport(outcome=payload.outcome, storage_changes=len(payload.diff_entries()))

    def _call(self, method: str, params: list[object]) -> object:
        return asyncio.run(self._call_async(method, params))

    async def _call_async(self, method: str, params: list[object]) -> object:
        request = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        log.debug("RPC %s", method)
        async with self.client_factory(self.endpoint.resilience()) as client:
            response = await client.post_json(self.endpoint.url, request)
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict):
            raise LedgerRPCError(f"Unexpected {method} response payload")
        rpc_response = RpcResponse.model_validate(payload)
        if rpc_response.error is not None:
            error = rpc_response.error
            log.error(f"RPC error {error.code} from {method}: {error.message}")
            raise LedgerRPCError(error.message, code=error.code)
        return rpc_response.result


if TYPE_CHECKING:
    _client_check: LedgerClient = RpcLedgerClient(EndpointConfig(url="http://localhost:8000"))
