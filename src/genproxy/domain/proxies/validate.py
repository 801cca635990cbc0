"""Validation of tabular proxy configuration sources.

A source is CSV text with the header ``Genesis Account,Proxy Account,Proxy
Type,Delay`` (exact order and count) followed by one row per genesis
account. Validation is all-or-nothing: the first violation raises and no rows
are returned.

Row checks run in a fixed order and stop at the first failure:
1) all four cells present and non-blank
2) owner address decodes
3) delegate address decodes
4) proxy type normalises against the vocabulary
5) delay is a non-negative integer that fits a block number
"""

from __future__ import annotations

import csv
import io
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Final

from genproxy.domain.errors import (
    EmptySourceError,
    InvalidAddressError,
    InvalidDelayError,
    MissingFieldError,
    RecordLengthError,
    SchemaError,
    UnknownCapabilityError,
)
from genproxy.domain.types import MAX_DELAY, AccountId, DelegationRow

from .canonicalize import normalize_capability

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from genproxy.domain.ports import AddressDecoder

OWNER_COLUMN: Final[str] = "Genesis Account"
DELEGATE_COLUMN: Final[str] = "Proxy Account"
CAPABILITY_COLUMN: Final[str] = "Proxy Type"
DELAY_COLUMN: Final[str] = "Delay"
EXPECTED_HEADER: Final[tuple[str, ...]] = (
    OWNER_COLUMN,
    DELEGATE_COLUMN,
    CAPABILITY_COLUMN,
    DELAY_COLUMN,
)

# thousands groups must share one separator: "1,000", "1_000_000", "1 000"
_GROUPED_DELAY: Final = re.compile(r"\d{1,3}(?P<sep>[, _])\d{3}(?:(?P=sep)\d{3})*(?:\.\d+)?")
_DELAY_SEPARATORS: Final[tuple[str, ...]] = (",", "_", " ")

log = logging.getLogger(__name__)


def validate_source(
    text: str,
    *,
    decode_address: AddressDecoder,
    source: str | None = None,
    expected_header: Sequence[str] = EXPECTED_HEADER,
) -> tuple[DelegationRow, ...]:
    """Parse and validate ``text``, returning rows in source order."""

    records = _read_records(text)
    header_record = next(records, None)
    if header_record is None:
        raise EmptySourceError("Source is empty", source=source)
    _, header = header_record
    check_header(header, expected_header, source=source)

    rows: list[DelegationRow] = []
    for line, cells in records:
        rows.append(
            _validate_row(
                cells,
                line=line,
                header=expected_header,
                decode_address=decode_address,
                source=source,
            )
        )

    if not rows:
        raise EmptySourceError("Source has no data rows", source=source)
    log.debug("Validated %s rows from %s", len(rows), source or "<text>")
    return tuple(rows)


def check_header(
    actual: Sequence[str],
    expected: Sequence[str] = EXPECTED_HEADER,
    *,
    source: str | None = None,
) -> None:
    """Require ``actual`` to equal ``expected`` position by position."""

    for index in range(max(len(actual), len(expected))):
        expected_name = expected[index] if index < len(expected) else None
        actual_name = actual[index] if index < len(actual) else None
        if expected_name != actual_name:
            raise SchemaError(
                expected_header=expected,
                actual_header=actual,
                column_index=index + 1,
                source=source,
            )


def parse_delay(raw: str) -> int:
    """Parse a delay cell; consistent thousands grouping is accepted.

    Raises ``ValueError`` for anything that is not a finite, non-negative
    integral number within the block number range. ``"007"`` and ``"7"``
    parse to the same value.
    """

    cleaned = raw.strip()
    if any(separator in cleaned for separator in _DELAY_SEPARATORS):
        if _GROUPED_DELAY.fullmatch(cleaned) is None:
            raise ValueError(f"misplaced digit separator: {raw!r}")
        for separator in _DELAY_SEPARATORS:
            cleaned = cleaned.replace(separator, "")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"not a number: {raw!r}") from None
    if not value.is_finite():
        raise ValueError(f"not finite: {raw!r}")
    if value < 0:
        raise ValueError(f"negative: {raw!r}")
    # range check stays on the Decimal, ahead of int()
    if value > MAX_DELAY:
        raise ValueError(f"exceeds {MAX_DELAY}: {raw!r}")
    if value != value.to_integral_value():
        raise ValueError(f"not an integer: {raw!r}")
    return int(value)


def _read_records(text: str) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(line, trimmed cells)`` for every non-blank record."""

    reader = csv.reader(io.StringIO(text.removeprefix("\ufeff")))
    for record in reader:
        cells = [cell.strip() for cell in record]
        if not any(cells):
            continue
        yield reader.line_num, cells


def _validate_row(
    cells: list[str],
    *,
    line: int,
    header: Sequence[str],
    decode_address: AddressDecoder,
    source: str | None,
) -> DelegationRow:
    if len(cells) > len(header):
        raise RecordLengthError(
            f"Row has {len(cells)} cells but the header has {len(header)}",
            source=source,
            line=line,
        )
    values = dict(zip(header, cells, strict=False))
    for column in header:
        if not values.get(column):
            raise MissingFieldError("Missing field", source=source, line=line, field=column)

    owner = _decode(values[OWNER_COLUMN], OWNER_COLUMN, decode_address, source=source, line=line)
    delegate = _decode(
        values[DELEGATE_COLUMN], DELEGATE_COLUMN, decode_address, source=source, line=line
    )

    raw_capability = values[CAPABILITY_COLUMN]
    try:
        capability = normalize_capability(raw_capability)
    except UnknownCapabilityError as exc:
        raise UnknownCapabilityError(
            exc.message,
            source=source,
            line=line,
            field=CAPABILITY_COLUMN,
            value=raw_capability,
        ) from None

    raw_delay = values[DELAY_COLUMN]
    try:
        delay = parse_delay(raw_delay)
    except ValueError:
        raise InvalidDelayError(
            "Invalid Delay value (must be a non-negative integer)",
            source=source,
            line=line,
            field=DELAY_COLUMN,
            value=raw_delay,
        ) from None

    return DelegationRow(
        owner=owner,
        delegate=delegate,
        capability=capability,
        delay=delay,
        line=line,
    )


def _decode(
    text: str,
    column: str,
    decode_address: AddressDecoder,
    *,
    source: str | None,
    line: int,
) -> AccountId:
    try:
        return decode_address(text)
    except ValueError:
        raise InvalidAddressError(
            f"Invalid {column} address",
            source=source,
            line=line,
            field=column,
            value=text,
        ) from None
