"""Capability normalisation and per-owner folding of validated rows."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from genproxy.domain.errors import DuplicateOwnerError, UnknownCapabilityError
from genproxy.domain.types import AccountId, CapabilityTag, DelegationRow, ProxyDefinition

if TYPE_CHECKING:
    from collections.abc import Iterable


_SEPARATORS: Final = re.compile(r"[\s_-]")


def capability_key(raw: str) -> str:
    """Comparison key: separators removed, lower-cased."""

    return _SEPARATORS.sub("", raw.strip()).lower()


CAPABILITY_SYNONYMS: Final[dict[str, CapabilityTag]] = {
    **{capability_key(tag.value): tag for tag in CapabilityTag},
    "pools": CapabilityTag.NOMINATION_POOLS,
}


def normalize_capability(raw: str) -> CapabilityTag:
    """Map free text onto the closed proxy type vocabulary.

    Synonyms are looked up by ``capability_key``. Anything else is accepted
    only if capitalising its first letter yields a vocabulary member verbatim.
    """

    trimmed = raw.strip()
    mapped = CAPABILITY_SYNONYMS.get(capability_key(trimmed))
    if mapped is not None:
        return mapped
    candidate = trimmed[:1].upper() + trimmed[1:]
    try:
        return CapabilityTag(candidate)
    except ValueError:
        known = ", ".join(tag.value for tag in CapabilityTag)
        raise UnknownCapabilityError(
            f'Unknown Proxy Type "{raw}". Known: {known}',
            field="Proxy Type",
            value=raw,
        ) from None


def to_mapping(
    rows: Iterable[DelegationRow],
    *,
    source: str | None = None,
) -> dict[AccountId, ProxyDefinition]:
    """Fold rows into ``{owner: definition}``, rejecting repeated owners.

    A second row for an owner is an error even when it repeats the first one
    exactly; nothing is ever overwritten.
    """

    mapping: dict[AccountId, ProxyDefinition] = {}
    first_seen: dict[AccountId, int | None] = {}
    for row in rows:
        if row.owner in mapping:
            raise DuplicateOwnerError(
                row.owner,
                source=source,
                line=row.line,
                first_line=first_seen[row.owner],
            )
        mapping[row.owner] = row.definition
        first_seen[row.owner] = row.line
    return mapping
