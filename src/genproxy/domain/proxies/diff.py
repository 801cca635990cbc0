"""Reconciliation of an OLD proxy configuration against a NEW one.

Each owner in the union of both mappings is classified exactly once:

- ``Unchanged``: same delegate, capability and delay on both sides
- ``Added``: only in NEW, one add
- ``Removed``: only in OLD, one removal
- ``Replaced``: on both sides and different, removal of OLD then add of NEW

There is no in-place modify: a changed delay or capability with the same
delegate is still a removal followed by an add.

Owners are visited in ascending order of their hex account id so the output
does not depend on the order either source listed them in.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

from .operations import AddDelegation, RemoveDelegation

if TYPE_CHECKING:
    from genproxy.domain.types import AccountId, ConfigurationMapping, ProxyDefinition

    from .operations import ProxyOperation

log = logging.getLogger(__name__)


class ChangeKind(StrEnum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"
    REPLACED = "replaced"


@dataclass(frozen=True, slots=True, kw_only=True)
class Unchanged:
    owner: AccountId
    current: ProxyDefinition
    kind: Literal[ChangeKind.UNCHANGED] = ChangeKind.UNCHANGED

    def operations(self) -> tuple[ProxyOperation, ...]:
        return ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Added:
    owner: AccountId
    new: ProxyDefinition
    kind: Literal[ChangeKind.ADDED] = ChangeKind.ADDED

    def operations(self) -> tuple[ProxyOperation, ...]:
        return (AddDelegation(owner=self.owner, definition=self.new),)


@dataclass(frozen=True, slots=True, kw_only=True)
class Removed:
    owner: AccountId
    old: ProxyDefinition
    kind: Literal[ChangeKind.REMOVED] = ChangeKind.REMOVED

    def operations(self) -> tuple[ProxyOperation, ...]:
        return (RemoveDelegation(owner=self.owner, definition=self.old),)


@dataclass(frozen=True, slots=True, kw_only=True)
class Replaced:
    owner: AccountId
    old: ProxyDefinition
    new: ProxyDefinition
    kind: Literal[ChangeKind.REPLACED] = ChangeKind.REPLACED

    def __post_init__(self) -> None:
        if self.old == self.new:
            raise ValueError("Replaced entry requires differing definitions")

    def operations(self) -> tuple[ProxyOperation, ...]:
        return (
            RemoveDelegation(owner=self.owner, definition=self.old),
            AddDelegation(owner=self.owner, definition=self.new),
        )


type ReconciliationEntry = Unchanged | Added | Removed | Replaced


@dataclass(frozen=True, slots=True)
class Reconciliation:
    """Ordered per-owner classification of an OLD/NEW pair."""

    entries: tuple[ReconciliationEntry, ...]

    @property
    def changes(self) -> tuple[ReconciliationEntry, ...]:
        return tuple(entry for entry in self.entries if entry.kind is not ChangeKind.UNCHANGED)

    @property
    def operations(self) -> tuple[ProxyOperation, ...]:
        return tuple(operation for entry in self.entries for operation in entry.operations())

    @property
    def is_noop(self) -> bool:
        return not self.changes

    def counts(self) -> Counter[ChangeKind]:
        return Counter(entry.kind for entry in self.entries)


def classify(
    owner: AccountId,
    old: ProxyDefinition | None,
    new: ProxyDefinition | None,
) -> ReconciliationEntry:
    if old is None:
        if new is None:
            raise ValueError(f"{owner} is absent from both configurations")
        return Added(owner=owner, new=new)
    if new is None:
        return Removed(owner=owner, old=old)
    if old == new:
        return Unchanged(owner=owner, current=new)
    return Replaced(owner=owner, old=old, new=new)


def diff(old: ConfigurationMapping, new: ConfigurationMapping) -> Reconciliation:
    """Classify every owner of ``old`` and ``new``.

    Identical inputs yield a reconciliation with no operations, which is a
    valid outcome distinct from any validation failure.
    """

    owners = sorted(old.keys() | new.keys())
    entries: list[ReconciliationEntry] = []
    for owner in owners:
        entry = classify(owner, old.get(owner), new.get(owner))
        log.debug("Owner %s: %s", owner, entry.kind)
        entries.append(entry)

    reconciliation = Reconciliation(entries=tuple(entries))
    counts = reconciliation.counts()
    log.info(
        "Reconciled %s owners: added=%s, removed=%s, replaced=%s, unchanged=%s",
        len(entries),
        counts[ChangeKind.ADDED],
        counts[ChangeKind.REMOVED],
        counts[ChangeKind.REPLACED],
        counts[ChangeKind.UNCHANGED],
    )
    return reconciliation


def replay(
    current: ConfigurationMapping,
    operations: tuple[ProxyOperation, ...],
) -> dict[AccountId, ProxyDefinition]:
    """Replay ``operations`` against ``current`` as the ledger would.

    Removing a definition that is not the owner's current one is an error.
    """

    state = dict(current)
    for operation in operations:
        match operation:
            case RemoveDelegation(owner=owner, definition=definition):
                if state.get(owner) != definition:
                    raise ValueError(f"{owner} does not hold {definition}")
                del state[owner]
            case AddDelegation(owner=owner, definition=definition):
                if owner in state:
                    raise ValueError(f"{owner} already holds {state[owner]}")
                state[owner] = definition
    return state
