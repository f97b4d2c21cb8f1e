"""Conversion runner implementation for the aureate CLI and library API."""
from __future__ import annotations

import logging
import time

from aureate.records.assembler import stream_records

from .context import ConversionContext, ConversionSummary
from .registry import EmitterRegistry

logger = logging.getLogger(__name__)


class ConversionRunner:
    """Stream records from the context's sources through a registered emitter."""

    def __init__(self, registry: EmitterRegistry) -> None:
        self._registry = registry

    def resolve(self, name: str | None) -> str:
        """Return the normalised name of a registered output format."""

        return self._registry.get(name).name

    def run(self, context: ConversionContext) -> ConversionSummary:
        """Convert every source in *context* and write the result to its sink."""

        definition = self._registry.get(context.output_format)
        output_format = definition.name
        emitter_logger = logging.getLogger(definition.module)
        labels = context.source_labels()
        emitter_logger.info(
            "Converting %s to %s (started %s)",
            ", ".join(labels),
            definition.name,
            context.started_at.isoformat(),
        )
        start = time.perf_counter()
        records = stream_records(
            context.sources,
            context.dialect,
            encoding=context.encoding,
            diagnostic=context.diagnostic,
        )
        try:
            written = definition.callable(records, context.sink)
        except Exception:
            emitter_logger.exception("Conversion to %s failed", definition.name)
            raise
        finally:
            # Releases any input file still open after a failure.
            records.close()
        elapsed = time.perf_counter() - start
        emitter_logger.info(
            "Wrote %d record(s) as %s in %.2fs",
            written,
            definition.name,
            elapsed,
        )
        return ConversionSummary(
            output_format=output_format,
            sources=labels,
            records=written,
            elapsed=elapsed,
        )
