"""Read-only impact summary of a reconciliation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from .diff import ChangeKind
from .operations import OperationKind

if TYPE_CHECKING:
    from genproxy.domain.types import AccountId

    from .diff import Reconciliation

OWNER_LIST_LIMIT: Final[int] = 10


@dataclass(frozen=True, slots=True)
class PlanSummary:
    impacted_owners: tuple[AccountId, ...]
    removals: int
    additions: int
    unchanged: int = 0

    @property
    def listed_owners(self) -> tuple[AccountId, ...] | None:
        """Impacted owners, or ``None`` when there are too many to list."""

        if len(self.impacted_owners) > OWNER_LIST_LIMIT:
            return None
        return self.impacted_owners

    def render(self) -> list[str]:
        lines = [
            "=== PLAN SUMMARY ===",
            f"Accounts impacted: {len(self.impacted_owners)}",
            f"Removals: {self.removals} | Additions: {self.additions}",
        ]
        listed = self.listed_owners
        if listed:
            lines.append(f"Accounts: {', '.join(str(owner) for owner in listed)}")
        return lines


def summarize(reconciliation: Reconciliation) -> PlanSummary:
    operations = reconciliation.operations
    return PlanSummary(
        impacted_owners=tuple(entry.owner for entry in reconciliation.changes),
        removals=sum(1 for operation in operations if operation.kind is OperationKind.REMOVE),
        additions=sum(1 for operation in operations if operation.kind is OperationKind.ADD),
        unchanged=reconciliation.counts()[ChangeKind.UNCHANGED],
    )
