"""Streaming CSV row reader over one or more concatenated sources."""
from __future__ import annotations

import csv
import logging
import sys
from typing import Callable, Iterable, Iterator, List, Optional, TextIO, Union

from aureate.errors import RowWidthError, StreamError

from .dialect import DEFAULT_DIALECT, DialectConfig, QuotePolicy, TrimPolicy
from .sources import InputSource

logger = logging.getLogger(__name__)

RawRow = List[str]
Diagnostic = Callable[[int, str], None]
Source = Union[InputSource, TextIO]

# Tokenizer states tracked while guarding escape characters.
_FIELD_START = "field-start"
_UNQUOTED = "unquoted"
_QUOTED = "quoted"
_ESCAPED = "escaped"
_QUOTE_SEEN = "quote-seen"


def _lift_field_limit() -> None:
    """Let :mod:`csv` accept fields of any length."""

    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return
        except OverflowError:
            # The limit is a C long, narrower than sys.maxsize on some platforms.
            limit //= 2


_lift_field_limit()


def log_malformed_row(row: int, message: str) -> None:
    """Default diagnostic: warn and let the reader skip the row."""

    logger.warning("Failed to parse row %d: %s, skipping...", row, message)


class _RecordLines:
    """Line iterator feeding :mod:`csv` that knows where records begin.

    The reader calls :meth:`start_record` before asking :mod:`csv` for the
    next record. Comment lines are only dropped at that boundary, so
    continuation lines of a quoted multi-line field are never mistaken for
    comments.

    :mod:`csv` treats ``escapechar`` as special everywhere, while an escape
    should only act inside quoted fields. Escape characters met outside
    quotes are therefore doubled, which :mod:`csv` reads back as one literal
    character.
    """

    def __init__(self, lines: Iterable[str], dialect: DialectConfig) -> None:
        self._lines = iter(lines)
        self._comment = dialect.comment
        self._escape = dialect.quoted_escape
        self._quote = dialect.quote
        self._delimiter = dialect.delimiter
        self._doublequote = dialect.disable_quotes is QuotePolicy.NONE
        self.start_record()

    def start_record(self) -> None:
        self._at_record_start = True
        self._state = _FIELD_START

    def __iter__(self) -> "_RecordLines":
        return self

    def __next__(self) -> str:
        while True:
            line = next(self._lines)
            if self._at_record_start and self._comment is not None and line.startswith(self._comment):
                continue
            self._at_record_start = False
            if self._escape is None:
                return line
            return self._guard_escapes(line)

    def _guard_escapes(self, line: str) -> str:
        out: List[str] = []
        state = self._state
        for char in line:
            out.append(char)
            if state is _ESCAPED:
                state = _QUOTED
            elif state is _QUOTED:
                if char == self._escape:
                    state = _ESCAPED
                elif char == self._quote:
                    state = _QUOTE_SEEN if self._doublequote else _UNQUOTED
            elif state is _QUOTE_SEEN and char == self._quote:
                state = _QUOTED
            elif char == self._delimiter or char in "\r\n":
                state = _FIELD_START
            elif state is _FIELD_START and char == self._quote:
                state = _QUOTED
            else:
                # After a closing quote csv copies the character as is.
                if char == self._escape and state is not _QUOTE_SEEN:
                    out.append(char)
                state = _UNQUOTED
        if state in (_UNQUOTED, _QUOTE_SEEN):
            # csv ends the record at the end of a line outside quotes.
            state = _FIELD_START
        self._state = state
        return "".join(out)


class RowReader:
    """Lazy, single-pass sequence of raw rows; the first row is the header."""

    def __init__(
        self,
        sources: Iterable[Source],
        dialect: DialectConfig = DEFAULT_DIALECT,
        *,
        encoding: str = "utf-8",
        diagnostic: Optional[Diagnostic] = None,
    ) -> None:
        self._sources = sources
        self.dialect = dialect
        self._encoding = encoding
        self._diagnostic = diagnostic or log_malformed_row
        self.header: Optional[RawRow] = None
        self._row_index = 0

    def __iter__(self) -> "RowReader":
        return self

    def __next__(self) -> RawRow:
        if not hasattr(self, "_iter"):
            self._iter = self._iter_rows()
        return next(self._iter)

    @property
    def rows_read(self) -> int:
        """Rows consumed so far, header and skipped malformed rows included."""

        return self._row_index

    def _iter_rows(self) -> Iterator[RawRow]:
        for source in self._sources:
            if isinstance(source, InputSource):
                with source.open(self._encoding) as handle:
                    yield from self._read_source(handle, source.label)
            else:
                label = getattr(source, "name", None) or "stream"
                yield from self._read_source(source, str(label))

    def _read_source(self, handle: TextIO, label: str) -> Iterator[RawRow]:
        logger.debug("Parsing CSV rows from %s", label)
        lines = _RecordLines(handle, self.dialect)
        rows = csv.reader(lines, **self.dialect.csv_options())
        while True:
            lines.start_record()
            try:
                fields = next(rows)
            except StopIteration:
                return
            except csv.Error as exc:
                self._row_index += 1
                self._diagnostic(self._row_index, f"{label}: {exc}")
                continue
            except (OSError, UnicodeDecodeError) as exc:
                raise StreamError(label, str(exc)) from exc
            if not fields:
                continue
            self._row_index += 1
            yield self._check_width(self._trim(fields))

    def _trim(self, fields: RawRow) -> RawRow:
        policy = self.dialect.trim
        if policy is TrimPolicy.NONE:
            return fields
        return [policy.apply(field) for field in fields]

    def _check_width(self, fields: RawRow) -> RawRow:
        if self.header is None:
            self.header = fields
            logger.debug("Header has %d field(s): %s", len(fields), fields)
            return fields

        expected = len(self.header)
        actual = len(fields)
        if actual == expected:
            return fields
        if not self.dialect.flexible:
            raise RowWidthError(self._row_index, expected, actual)
        if actual > expected:
            logger.debug(
                "Row %d has %d field(s), dropping %d beyond the header",
                self._row_index,
                actual,
                actual - expected,
            )
            return fields[:expected]
        return fields


def read_rows(
    sources: Iterable[Source],
    dialect: DialectConfig = DEFAULT_DIALECT,
    *,
    encoding: str = "utf-8",
    diagnostic: Optional[Diagnostic] = None,
) -> RowReader:
    return RowReader(sources, dialect, encoding=encoding, diagnostic=diagnostic)


__all__ = ["Diagnostic", "RawRow", "RowReader", "log_malformed_row", "read_rows"]
