"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from genproxy.adapters.rpc import RpcLedgerClient
from genproxy.adapters.scale import ScaleCallEncoder
from genproxy.adapters.ss58 import decode_address
from genproxy.config import SIMULATED_ENDPOINT, ConfigurationError, load_call_indices
from genproxy.domain.proxies import ProxyReconciliationPipeline, ReconciliationOutcome, TableSource

if TYPE_CHECKING:
    from genproxy.config import EndpointConfig
    from genproxy.domain.ports import AddressDecoder, CallEncoder, DryRunReport, LedgerClient

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlanReport:
    """Plan outcome plus its encoded forms.

    ``batch_hex`` is the outer batch before any privileged envelope and
    ``final_hex`` the call to sign; both are ``None`` when there is nothing
    to do.
    """

    outcome: ReconciliationOutcome
    batch_hex: str | None = None
    final_hex: str | None = None
    final_call: bytes | None = None

    @property
    def nothing_to_do(self) -> bool:
        return self.outcome.nothing_to_do


def read_source(path: Path | str) -> TableSource:
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise ConfigurationError(f"Proxy file not found: {file_path}") from None
    except UnicodeDecodeError as exc:
        raise ConfigurationError(
            f"Proxy file is not valid UTF-8: {file_path} (byte {exc.start})"
        ) from exc
    return TableSource(name=str(file_path), text=text)


def plan_proxy_modification(
    *,
    new_path: Path | str,
    old_path: Path | str | None,
    privileged: bool = False,
    call_indices_path: Path | str | None = None,
    decoder: AddressDecoder | None = None,
    encoder: CallEncoder | None = None,
) -> PlanReport:
    """Plan the calls moving the OLD proxy configuration to the NEW one.

    Without ``old_path`` this registers every row of the NEW source.
    """

    pipeline = ProxyReconciliationPipeline(decode_address=decoder or decode_address)
    old = read_source(old_path) if old_path is not None else None
    new = read_source(new_path)
    log.info(
        "Planning proxy changes: new=%s, old=%s, privileged=%s",
        new.name,
        old.name if old else None,
        privileged,
    )
    outcome = pipeline.reconcile(new=new, old=old, privileged=privileged)
    if outcome.nothing_to_do:
        return PlanReport(outcome=outcome)

    effective_encoder = encoder or ScaleCallEncoder(load_call_indices(call_indices_path))
    batch = outcome.plan.batch
    final = outcome.plan.final
    if batch is None or final is None:
        raise RuntimeError("Non-empty plan without a batch")
    final_call = effective_encoder.encode(final)
    return PlanReport(
        outcome=outcome,
        batch_hex="0x" + effective_encoder.encode(batch).hex(),
        final_hex="0x" + final_call.hex(),
        final_call=final_call,
    )


def plan_proxy_registration(
    *,
    path: Path | str,
    privileged: bool = False,
    call_indices_path: Path | str | None = None,
    decoder: AddressDecoder | None = None,
    encoder: CallEncoder | None = None,
) -> PlanReport:
    """Plan adding every proxy listed in ``path``."""

    return plan_proxy_modification(
        new_path=path,
        old_path=None,
        privileged=privileged,
        call_indices_path=call_indices_path,
        decoder=decoder,
        encoder=encoder,
    )


def dry_run_plan(
    report: PlanReport,
    *,
    endpoint: EndpointConfig,
    client: LedgerClient | None = None,
) -> DryRunReport | None:
    """Execute a privileged plan on a simulated endpoint as the privileged key.

    Returns ``None`` when the preconditions are not met: the plan must be
    non-empty and privileged, and the endpoint must be the simulated one.
    """

    if report.final_call is None:
        log.info("Skipping dry run: nothing to do")
        return None
    if not report.outcome.plan.privileged or not endpoint.is_simulated:
        log.info(
            "Skipping dry run (requires --sudo and the simulated endpoint %s, got %s)",
            SIMULATED_ENDPOINT,
            endpoint.url,
        )
        return None

    ledger = client or RpcLedgerClient(endpoint)
    version = ledger.runtime_version()
    log.info("Dry run against %s v%s at %s", version.spec_name, version.spec_version, endpoint.url)
    signer = ledger.privileged_key()
    if signer is None:
        raise ConfigurationError("Endpoint has no privileged key configured")
    log.info("Privileged key: %s", signer)
    result = ledger.dry_run(report.final_call, signer=signer)
    log.info(
        "Dry run finished: outcome=%s, storage_changes=%s",
        result.outcome,
        result.storage_changes,
    )
    return result
