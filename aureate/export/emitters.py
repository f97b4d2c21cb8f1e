"""Encoders that write a record stream as JSON or YAML."""
from __future__ import annotations

import json
import logging
import math
from typing import Iterable, Iterator, List, TextIO

import yaml

from aureate.core import register_emitter
from aureate.errors import EncodingError, StreamError
from aureate.records import Record

logger = logging.getLogger(__name__)

_PRETTY_INDENT = "  "


def _sink_label(sink: TextIO) -> str:
    return str(getattr(sink, "name", None) or "output")


def _write(sink: TextIO, text: str) -> None:
    try:
        sink.write(text)
    except (OSError, UnicodeEncodeError) as exc:
        raise StreamError(_sink_label(sink), str(exc)) from exc


def _flush(sink: TextIO) -> None:
    try:
        sink.flush()
    except (OSError, UnicodeEncodeError) as exc:
        raise StreamError(_sink_label(sink), str(exc)) from exc


def checked_records(records: Iterable[Record]) -> Iterator[Record]:
    """Yield *records*, refusing floats that JSON and YAML cannot represent."""

    for ordinal, record in enumerate(records, start=1):
        for column, value in record.items():
            if isinstance(value, float) and not math.isfinite(value):
                raise EncodingError(
                    f"Cannot encode non-finite float {value!r}",
                    column=column,
                    record=ordinal,
                )
        yield record


@register_emitter("prettyj", "Indented JSON array, streamed record by record.")
def emit_pretty_json(records: Iterable[Record], sink: TextIO) -> int:
    logger.info("Using pretty Json writer")
    count = 0
    _write(sink, "[")
    for record in checked_records(records):
        body = json.dumps(record, indent=2, ensure_ascii=False, allow_nan=False)
        # Encoded JSON never holds a raw newline inside a string.
        body = body.replace("\n", "\n" + _PRETTY_INDENT)
        _write(sink, ("\n" if count == 0 else ",\n") + _PRETTY_INDENT + body)
        count += 1
    _write(sink, "\n]" if count else "]")
    _flush(sink)
    return count


@register_emitter("json", "Compact JSON array, streamed record by record.")
def emit_json(records: Iterable[Record], sink: TextIO) -> int:
    logger.info("Using Json writer")
    count = 0
    _write(sink, "[")
    for record in checked_records(records):
        if count:
            _write(sink, ",")
        _write(sink, json.dumps(record, separators=(",", ":"), ensure_ascii=False, allow_nan=False))
        count += 1
    _write(sink, "]")
    _flush(sink)
    return count


@register_emitter("yaml", "YAML sequence of mappings; buffers the whole input.")
def emit_yaml(records: Iterable[Record], sink: TextIO) -> int:
    logger.info("Using Yaml writer")
    # safe_dump needs the full document up front, so memory grows with input.
    documents: List[Record] = list(checked_records(records))
    logger.debug("Buffered %d record(s) for YAML encoding", len(documents))
    try:
        text = yaml.safe_dump(
            documents,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    except yaml.YAMLError as exc:  # pragma: no cover - scalars always represent
        raise EncodingError(f"Failed to encode YAML: {exc}") from exc
    _write(sink, text)
    _flush(sink)
    return len(documents)


__all__ = ["checked_records", "emit_json", "emit_pretty_json", "emit_yaml"]
