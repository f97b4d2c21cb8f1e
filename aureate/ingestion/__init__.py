"""CSV ingestion: dialect rules, input sources, and the row reader."""
from __future__ import annotations

from .dialect import DEFAULT_DIALECT, DialectConfig, QuotePolicy, TrimPolicy
from .reader import Diagnostic, RawRow, RowReader, read_rows
from .sources import InputSource, resolve_sources

__all__ = [
    "DEFAULT_DIALECT",
    "DialectConfig",
    "Diagnostic",
    "InputSource",
    "QuotePolicy",
    "RawRow",
    "RowReader",
    "TrimPolicy",
    "read_rows",
    "resolve_sources",
]
