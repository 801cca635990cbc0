"""Plan assembly: owner-scoped units folded into one atomic batch."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .operations import Batch, Privileged, Scoped

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .diff import ReconciliationEntry
    from .operations import Call, ProxyOperation

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SubmissionPlan:
    """Assembled plan for one reconciliation run.

    ``batch`` is the outer all-or-nothing batch of owner-scoped units and
    ``final`` is what gets signed: the batch itself, or the batch inside a
    privileged envelope when one was requested. Both are ``None`` when
    there is nothing to do.
    """

    units: tuple[Scoped, ...]
    privileged: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.units

    @property
    def batch(self) -> Batch | None:
        if not self.units:
            return None
        return Batch(self.units)

    @property
    def final(self) -> Call | None:
        batch = self.batch
        if batch is None or not self.privileged:
            return batch
        return Privileged(batch)


def scope_operations(operations: tuple[ProxyOperation, ...]) -> Scoped:
    """Wrap one owner's operations so they execute with that owner as origin.

    A single operation is scoped directly; two are batched first so the
    removal and the addition apply together or not at all.
    """

    if not operations:
        raise ValueError("Cannot scope an empty operation list")
    owner = operations[0].owner
    if len(operations) == 1:
        return Scoped(owner, operations[0])
    return Scoped(owner, Batch(operations))


def assemble(entries: Iterable[ReconciliationEntry], *, privileged: bool = False) -> SubmissionPlan:
    """Build the submission plan, keeping the order of ``entries``.

    ``privileged`` adds the elevated envelope; it is never implied.
    """

    units: list[Scoped] = []
    for entry in entries:
        operations = entry.operations()
        if not operations:
            continue
        units.append(scope_operations(operations))

    plan = SubmissionPlan(units=tuple(units), privileged=privileged)
    if plan.is_empty:
        log.info("Plan is empty")
    else:
        log.info("Assembled %s owner-scoped units (privileged=%s)", len(units), privileged)
    return plan
