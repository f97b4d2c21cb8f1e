"""Conversion primitives for the aureate runtime."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Protocol, Sequence, TextIO

from aureate.ingestion.dialect import DEFAULT_DIALECT, DialectConfig
from aureate.ingestion.reader import Diagnostic, Source
from aureate.records.assembler import Record


class EmitterCallable(Protocol):
    """Callable protocol for an output format encoder."""

    def __call__(self, records: Iterable[Record], sink: TextIO) -> int:
        """Write *records* to *sink* and return how many were written."""


@dataclass(slots=True)
class ConversionContext:
    """Everything one conversion run needs."""

    sources: Sequence[Source]
    sink: TextIO
    output_format: str = "json"
    dialect: DialectConfig = DEFAULT_DIALECT
    encoding: str = "utf-8"
    diagnostic: Optional[Diagnostic] = None
    started_at: datetime = field(default_factory=datetime.now)

    def source_labels(self) -> List[str]:
        labels: List[str] = []
        for source in self.sources:
            label = getattr(source, "label", None) or getattr(source, "name", None) or "stream"
            labels.append(str(label))
        return labels


@dataclass(slots=True, frozen=True)
class EmitterDefinition:
    """Metadata about a registered output format."""

    name: str
    callable: EmitterCallable
    description: str
    module: str


@dataclass(slots=True)
class ConversionSummary:
    """Outcome of a successful conversion."""

    output_format: str
    sources: List[str]
    records: int
    elapsed: float
