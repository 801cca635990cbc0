from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest

from genproxy.app import dry_run_plan, plan_proxy_modification, plan_proxy_registration
from genproxy.config import ConfigurationError, EndpointConfig
from genproxy.domain.errors import SchemaError
from genproxy.domain.ports import DryRunReport, RuntimeVersion
from tests.support.proxies import account, csv_row, csv_text

if TYPE_CHECKING:
    from pathlib import Path

    from genproxy.domain.types import AccountId


@dataclass
class FakeLedgerClient:
    sudo_key: AccountId | None = None
    calls: list[tuple[bytes, AccountId]] = field(default_factory=list)

    def runtime_version(self) -> RuntimeVersion:
        return RuntimeVersion(spec_name="dancelight", spec_version=1)

    def privileged_key(self) -> AccountId | None:
        return self.sudo_key

    def dry_run(self, call: bytes, *, signer: AccountId) -> DryRunReport:
        self.calls.append((call, signer))
        return DryRunReport(outcome="0x0000", storage_changes=3)


SIMULATED = EndpointConfig(url="http://localhost:8000")


def _write(tmp_path: Path, name: str, *rows: tuple[str, str, str, str]) -> Path:
    path = tmp_path / name
    path.write_text(csv_text(rows), encoding="utf-8")
    return path


def test_modification_encodes_batch_and_final_call(
    tmp_path: Path,
    call_indices_file: Path,
) -> None:
    old = _write(tmp_path, "old.csv", csv_row(1, 10))
    new = _write(tmp_path, "new.csv", csv_row(1, 20), csv_row(2, 30, "Staking", "100"))

    report = plan_proxy_modification(
        new_path=new,
        old_path=old,
        call_indices_path=call_indices_file,
    )

    assert not report.nothing_to_do
    assert report.batch_hex is not None
    assert report.batch_hex.startswith("0x0102" + "08")
    assert report.final_hex == report.batch_hex
    assert report.outcome.summary.removals == 1
    assert report.outcome.summary.additions == 2


def test_privileged_plan_wraps_batch(tmp_path: Path, call_indices_file: Path) -> None:
    new = _write(tmp_path, "new.csv", csv_row(1, 20))

    report = plan_proxy_registration(
        path=new,
        privileged=True,
        call_indices_path=call_indices_file,
    )

    assert report.batch_hex is not None
    assert report.final_hex == "0xff00" + report.batch_hex.removeprefix("0x")


def test_identical_files_need_no_call_index_table(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("GENPROXY_CALL_INDICES", raising=False)
    old = _write(tmp_path, "old.csv", csv_row(1, 10, "Governance", "5"))
    new = _write(tmp_path, "new.csv", csv_row(1, 10, "governance", "5"))

    report = plan_proxy_modification(new_path=new, old_path=old)

    assert report.nothing_to_do
    assert report.batch_hex is None
    assert report.final_hex is None


def test_missing_proxy_file_is_a_configuration_error(tmp_path: Path) -> None:
    new = _write(tmp_path, "new.csv", csv_row(1, 10))

    with pytest.raises(ConfigurationError, match="not found"):
        plan_proxy_modification(new_path=new, old_path=tmp_path / "missing.csv")


def test_validation_errors_name_the_file(tmp_path: Path) -> None:
    new = tmp_path / "new.csv"
    new.write_text("Owner,Delegate,Type,Delay\n", encoding="utf-8")

    with pytest.raises(SchemaError) as excinfo:
        plan_proxy_registration(path=new)

    assert str(new) in str(excinfo.value)


def test_dry_run_uses_privileged_key_as_signer(tmp_path: Path, call_indices_file: Path) -> None:
    new = _write(tmp_path, "new.csv", csv_row(1, 20))
    report = plan_proxy_registration(path=new, privileged=True, call_indices_path=call_indices_file)
    client = FakeLedgerClient(sudo_key=account(99))

    result = dry_run_plan(report, endpoint=SIMULATED, client=client)

    assert result is not None
    assert result.succeeded
    assert client.calls == [(report.final_call, account(99))]


def test_dry_run_requires_privileged_plan(tmp_path: Path, call_indices_file: Path) -> None:
    new = _write(tmp_path, "new.csv", csv_row(1, 20))
    report = plan_proxy_registration(path=new, call_indices_path=call_indices_file)
    client = FakeLedgerClient(sudo_key=account(99))

    assert dry_run_plan(report, endpoint=SIMULATED, client=client) is None
    assert client.calls == []


def test_dry_run_requires_simulated_endpoint(tmp_path: Path, call_indices_file: Path) -> None:
    new = _write(tmp_path, "new.csv", csv_row(1, 20))
    report = plan_proxy_registration(path=new, privileged=True, call_indices_path=call_indices_file)
    client = FakeLedgerClient(sudo_key=account(99))

    remote = EndpointConfig(url="https://node.example", network="tanssi")

    assert dry_run_plan(report, endpoint=remote, client=client) is None
    assert client.calls == []


def test_dry_run_without_privileged_key_fails(tmp_path: Path, call_indices_file: Path) -> None:
    new = _write(tmp_path, "new.csv", csv_row(1, 20))
    report = plan_proxy_registration(path=new, privileged=True, call_indices_path=call_indices_file)

    with pytest.raises(ConfigurationError, match="privileged key"):
        dry_run_plan(report, endpoint=SIMULATED, client=FakeLedgerClient())


def test_non_utf8_proxy_file_is_a_configuration_error(tmp_path: Path) -> None:
    new = tmp_path / "new.csv"
    new.write_bytes(b"Genesis Account,Proxy Account,Proxy Type,Delay\n\xff\xfe,\x80,Any,0\n")

    with pytest.raises(ConfigurationError, match="not valid UTF-8") as excinfo:
        plan_proxy_registration(path=new)

    assert str(new) in str(excinfo.value)
