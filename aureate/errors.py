"""Exception hierarchy surfaced by the conversion pipeline."""
from __future__ import annotations


class ConversionError(RuntimeError):
    """Base class for every error raised while converting CSV input."""


class ConfigError(ConversionError, ValueError):
    """Raised when dialect options or the output format are invalid."""


class RowWidthError(ConversionError):
    """Raised when a data row's field count differs from the header's."""

    def __init__(self, row: int, expected: int, actual: int) -> None:
        super().__init__(
            f"Row {row} has {actual} field(s), expected {expected} to match the header"
        )
        self.row = row            # 1-based ordinal across all sources (header is 1)
        self.expected = expected
        self.actual = actual


class StreamError(ConversionError):
    """Raised when an input source or the output sink cannot be read or written."""

    def __init__(self, target: str, reason: str) -> None:
        super().__init__(f"I/O failure on {target}: {reason}")
        self.target = target


class EncodingError(ConversionError):
    """Raised when a value has no JSON/YAML representation (NaN, infinity)."""

    def __init__(
        self,
        reason: str,
        *,
        column: str | None = None,
        record: int | None = None,
    ) -> None:
        if column is not None:
            reason = f"{reason} (column {column!r} of record {record})"
        super().__init__(reason)
        self.column = column
        self.record = record      # 1-based data record ordinal (header excluded)


__all__ = [
    "ConversionError",
    "ConfigError",
    "RowWidthError",
    "StreamError",
    "EncodingError",
]
