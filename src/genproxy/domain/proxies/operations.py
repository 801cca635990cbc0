"""Operation algebra for proxy reconciliation plans.

Leaves are the two primitive proxy operations. Wrappers compose them:

- ``Scoped(owner, call)`` executes ``call`` with ``owner`` as origin
- ``Batch(calls)`` executes ``calls`` all-or-nothing, in order
- ``Privileged(call)`` executes ``call`` under the elevated key

Values are immutable; building a plan is a fold, not a sequence of calls
against a connection.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Iterator

    from genproxy.domain.types import AccountId, ProxyDefinition


class OperationKind(StrEnum):
    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True, slots=True, kw_only=True)
class AddDelegation:
    owner: AccountId
    definition: ProxyDefinition
    kind: Literal[OperationKind.ADD] = OperationKind.ADD

    def __str__(self) -> str:
        return f"Add({self.definition})"


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoveDelegation:
    owner: AccountId
    definition: ProxyDefinition
    kind: Literal[OperationKind.REMOVE] = OperationKind.REMOVE

    def __str__(self) -> str:
        return f"Remove({self.definition})"


type ProxyOperation = AddDelegation | RemoveDelegation


@dataclass(frozen=True, slots=True)
class Batch:
    calls: tuple[Call, ...]

    def __post_init__(self) -> None:
        if not self.calls:
            raise ValueError("Batch must contain at least one call")


@dataclass(frozen=True, slots=True)
class Scoped:
    owner: AccountId
    call: ProxyOperation | Batch

    def __post_init__(self) -> None:
        for operation in iter_operations(self.call):
            if operation.owner != self.owner:
                raise ValueError(
                    f"operation for {operation.owner} cannot be scoped to {self.owner}"
                )


@dataclass(frozen=True, slots=True)
class Privileged:
    call: Call


type Call = ProxyOperation | Batch | Scoped | Privileged


def iter_operations(call: Call) -> Iterator[ProxyOperation]:
    """Yield the primitive operations of ``call`` depth-first, in order."""

    match call:
        case AddDelegation() | RemoveDelegation():
            yield call
        case Batch(calls=calls):
            for inner in calls:
                yield from iter_operations(inner)
        case Scoped(call=inner) | Privileged(call=inner):
            yield from iter_operations(inner)
