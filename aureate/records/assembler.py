"""Turn header + raw rows into ordered, uniformly keyed records."""
from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from aureate.ingestion.dialect import DEFAULT_DIALECT, DialectConfig
from aureate.ingestion.reader import Diagnostic, RawRow, RowReader, Source

from .inference import TypedValue, infer_value

logger = logging.getLogger(__name__)

Record = Dict[str, TypedValue]


class RecordAssembler:
    """Map raw rows onto the header, inferring a type for every field.

    Short rows are padded with ``None`` and long rows lose the fields beyond
    the header width. Duplicate header names are kept, so the value of the
    last duplicate column wins in the resulting mapping.
    """

    def __init__(self, header: Sequence[str]) -> None:
        self.header: List[str] = list(header)
        self.width = len(self.header)
        duplicates = sorted(name for name, count in Counter(self.header).items() if count > 1)
        if duplicates:
            logger.warning(
                "Duplicate column name(s) %s: only the last occurrence of each is kept",
                duplicates,
            )

    def assemble(self, row: Sequence[str]) -> Record:
        record: Record = {}
        for index, name in enumerate(self.header):
            record[name] = infer_value(row[index]) if index < len(row) else None
        return record

    def __call__(self, rows: Iterable[Sequence[str]]) -> Iterator[Record]:
        for row in rows:
            record = self.assemble(row)
            logger.debug("Record contents: %s", record)
            yield record


def assemble_records(rows: Iterable[RawRow]) -> Iterator[Record]:
    """Consume the first row as the header and yield one record per later row."""

    iterator = iter(rows)
    header = next(iterator, None)
    if header is None:
        logger.info("Input contained no rows; nothing to convert")
        return
    yield from RecordAssembler(header)(iterator)


def stream_records(
    sources: Iterable[Source],
    dialect: DialectConfig = DEFAULT_DIALECT,
    *,
    encoding: str = "utf-8",
    diagnostic: Optional[Diagnostic] = None,
) -> Iterator[Record]:
    """Fused reader -> inference -> assembly pass over *sources*."""

    reader = RowReader(sources, dialect, encoding=encoding, diagnostic=diagnostic)
    yield from assemble_records(reader)


__all__ = ["Record", "RecordAssembler", "assemble_records", "stream_records"]
