"""End-to-end reconciliation pipeline.

validate (each side) -> fold per owner -> diff -> assemble, with the summary
computed from the diff. Every stage is a pure function; this module only
threads their return values together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .assemble import SubmissionPlan, assemble
from .canonicalize import to_mapping
from .diff import Reconciliation, diff
from .summary import PlanSummary, summarize
from .validate import validate_source

if TYPE_CHECKING:
    from genproxy.domain.ports import AddressDecoder
    from genproxy.domain.types import AccountId, ProxyDefinition

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TableSource:
    """Raw text of one configuration source and the name used in errors."""

    name: str
    text: str


@dataclass(frozen=True, slots=True)
class ReconciliationOutcome:
    reconciliation: Reconciliation
    plan: SubmissionPlan
    summary: PlanSummary

    @property
    def nothing_to_do(self) -> bool:
        return self.plan.is_empty


@dataclass(slots=True)
class ProxyReconciliationPipeline:
    """Run validation, canonicalisation, diffing and assembly."""

    decode_address: AddressDecoder

    def load(self, source: TableSource) -> dict[AccountId, ProxyDefinition]:
        rows = validate_source(source.text, decode_address=self.decode_address, source=source.name)
        mapping = to_mapping(rows, source=source.name)
        log.info("Loaded %s genesis accounts from %s", len(mapping), source.name)
        return mapping

    def reconcile(
        self,
        *,
        new: TableSource,
        old: TableSource | None = None,
        privileged: bool = False,
    ) -> ReconciliationOutcome:
        """Compute the plan moving ``old`` to ``new``.

        Both sources are fully validated before anything is diffed. Without
        ``old`` every owner of ``new`` is an addition.
        """

        new_mapping = self.load(new)
        old_mapping = self.load(old) if old is not None else {}
        reconciliation = diff(old_mapping, new_mapping)
        return ReconciliationOutcome(
            reconciliation=reconciliation,
            plan=assemble(reconciliation.entries, privileged=privileged),
            summary=summarize(reconciliation),
        )
