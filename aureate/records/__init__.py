"""Typed record construction from raw CSV rows."""
from __future__ import annotations

from .assembler import Record, RecordAssembler, assemble_records, stream_records
from .inference import TypedValue, canonical_text, infer_row, infer_value

__all__ = [
    "Record",
    "RecordAssembler",
    "TypedValue",
    "assemble_records",
    "canonical_text",
    "infer_row",
    "infer_value",
    "stream_records",
]
