"""Validation errors raised while reading proxy configuration sources.

Every error is fatal to a run. Messages name the source, the 1-based line
(the header is line 1) and the offending field/value where known.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .types import AccountId


class ProxyConfigError(ValueError):
    """Base class for proxy configuration validation failures."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        line: int | None = None,
        field: str | None = None,
        value: str | None = None,
    ) -> None:
        self.message = message
        self.source = source
        self.line = line
        self.field = field
        self.value = value
        super().__init__(self._render())

    def _render(self) -> str:
        location: list[str] = []
        if self.source is not None:
            location.append(f'in "{self.source}"')
        if self.line is not None:
            location.append(f"at row {self.line}")
        if self.field is not None:
            detail = f"field {self.field!r}"
            if self.value is not None:
                detail += f" = {self.value!r}"
            location.append(detail)
        if not location:
            return self.message
        return f"{self.message} ({', '.join(location)})"


class SchemaError(ProxyConfigError):
    """Header row does not match the expected columns."""

    def __init__(
        self,
        *,
        expected_header: Sequence[str],
        actual_header: Sequence[str],
        column_index: int,
        source: str | None = None,
    ) -> None:
        self.expected_header = tuple(expected_header)
        self.actual_header = tuple(actual_header)
        self.column_index = column_index
        position = column_index - 1
        expected = self.expected_header[position] if position < len(self.expected_header) else None
        actual = self.actual_header[position] if position < len(self.actual_header) else None
        super().__init__(
            f'Header mismatch: expected "{expected}", got "{actual}" at column {column_index}',
            source=source,
            line=1,
        )


class EmptySourceError(ProxyConfigError):
    """Source holds no data rows."""


class MissingFieldError(ProxyConfigError):
    """A required cell is absent or blank."""


class RecordLengthError(ProxyConfigError):
    """A data row has more cells than the header."""


class InvalidAddressError(ProxyConfigError):
    """An address cell does not decode to an account id."""


class UnknownCapabilityError(ProxyConfigError):
    """A proxy type is outside the closed vocabulary."""


class InvalidDelayError(ProxyConfigError):
    """A delay is not a non-negative integer within the block number range."""


class DuplicateOwnerError(ProxyConfigError):
    """The same genesis account appears twice within one source."""

    def __init__(
        self,
        owner: AccountId,
        *,
        source: str | None = None,
        line: int | None = None,
        first_line: int | None = None,
    ) -> None:
        self.owner = owner
        self.first_line = first_line
        message = f"Duplicate Genesis Account {owner}"
        if first_line is not None:
            message += f" (first seen at row {first_line})"
        super().__init__(
            message + "; a single proxy config per genesis account is expected",
            source=source,
            line=line,
        )
