from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import pytest

from genproxy.adapters.http_resilience import ResilientClient
from genproxy.adapters.rpc import SUDO_KEY_STORAGE_KEY, LedgerRPCError, RpcLedgerClient
from genproxy.adapters.ss58 import decode_address
from genproxy.config.http_resilience import ResilienceConfig
from genproxy.config.network import EndpointConfig
from genproxy.domain.ports import LedgerClient
from genproxy.domain.types import AccountId
from tests.support.proxies import account

if TYPE_CHECKING:
    from collections.abc import Callable

ALICE_SS58 = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    return factory


def _rpc_client(
    handler: Callable[[httpx.Request], httpx.Response],
) -> RpcLedgerClient:
    return RpcLedgerClient(
        EndpointConfig(url="http://localhost:8000"),
        client_factory=_make_client_factory(handler),
    )


def _result(request: httpx.Request, result: object) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})


def test_client_satisfies_ledger_port() -> None:
    assert isinstance(_rpc_client(lambda request: _result(request, None)), LedgerClient)


def test_runtime_version_parses_camel_case_payload() -> None:
    seen: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return _result(request, {"specName": "dancelight", "specVersion": 1200, "apis": []})

    version = _rpc_client(handler).runtime_version()

    assert version.spec_name == "dancelight"
    assert version.spec_version == 1200
    assert seen[0]["method"] == "state_getRuntimeVersion"
    assert seen[0]["jsonrpc"] == "2.0"


def test_privileged_key_reads_sudo_storage() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert body["method"] == "state_getStorage"
        assert body["params"] == [SUDO_KEY_STORAGE_KEY]
        return _result(request, account(7).hex)

    assert _rpc_client(handler).privileged_key() == account(7)


def test_privileged_key_is_none_without_sudo_pallet() -> None:
    assert _rpc_client(lambda request: _result(request, None)).privileged_key() is None


def test_privileged_key_rejects_wrong_length() -> None:
    with pytest.raises(LedgerRPCError, match="bytes"):
        _rpc_client(lambda request: _result(request, "0x1234")).privileged_key()


def test_dry_run_posts_call_and_signer() -> None:
    seen: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return _result(
            request,
            {"outcome": "0x000000", "storageDiff": [["0x01", "0x02"], ["0x03", None]]},
        )

    signer = account(9)
    report = _rpc_client(handler).dry_run(b"\x01\x02", signer=signer)

    assert report.succeeded
    assert report.storage_changes == 2
    assert seen[0]["method"] == "dev_dryRun"
    assert seen[0]["params"] == [
        {"raw": False, "extrinsic": {"call": "0x0102", "address": signer.address}}
    ]


def test_dry_run_encodes_signer_without_source_text() -> None:
    seen: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return _result(request, {"outcome": "0x0001", "storageDiff": []})

    bare = AccountId(raw=decode_address(ALICE_SS58).raw)
    report = _rpc_client(handler).dry_run(b"\x00", signer=bare)

    assert not report.succeeded
    params = seen[0]["params"]
    assert isinstance(params, list)
    assert params[0]["extrinsic"]["address"] == ALICE_SS58


def test_rpc_error_payload_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "jsonrpc": "2.0",
                "id": body["id"],
                "error": {"code": -32601, "message": "Method not found"},
            },
        )

    with pytest.raises(LedgerRPCError) as excinfo:
        _rpc_client(handler).runtime_version()

    assert excinfo.value.code == -32601
    assert "Method not found" in str(excinfo.value)


def test_http_error_status_raises() -> None:
    with pytest.raises(httpx.HTTPStatusError):
        _rpc_client(lambda _request: httpx.Response(404)).runtime_version()
