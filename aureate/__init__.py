"""aureate - stream CSV into typed JSON or YAML records."""
from __future__ import annotations

from importlib import metadata
from typing import Iterable, TextIO

from aureate.core import ConversionContext, ConversionRunner, ConversionSummary, registry
from aureate.errors import ConfigError, ConversionError, EncodingError, RowWidthError, StreamError
from aureate.ingestion import DEFAULT_DIALECT, DialectConfig, InputSource, QuotePolicy, TrimPolicy
from aureate.ingestion.reader import Diagnostic, Source
from aureate.settings import Settings

__all__ = [
    "__version__",
    "ConfigError",
    "ConversionContext",
    "ConversionError",
    "ConversionRunner",
    "ConversionSummary",
    "DialectConfig",
    "EncodingError",
    "InputSource",
    "QuotePolicy",
    "RowWidthError",
    "Settings",
    "StreamError",
    "TrimPolicy",
    "bootstrap",
    "convert",
    "registry",
]


def __getattr__(name: str):
    if name == "__version__":
        try:
            return metadata.version("aureate")
        except metadata.PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(name)


def bootstrap() -> None:
    """Import emitter modules to ensure registration has occurred."""

    from aureate import export  # noqa: F401


def convert(
    sources: Iterable[Source],
    sink: TextIO,
    output_format: str = "json",
    dialect: DialectConfig | None = None,
    *,
    encoding: str = "utf-8",
    diagnostic: Diagnostic | None = None,
) -> ConversionSummary:
    """Convert CSV *sources* into *output_format* written to *sink*."""

    bootstrap()
    context = ConversionContext(
        sources=list(sources),
        sink=sink,
        output_format=output_format,
        dialect=dialect or DEFAULT_DIALECT,
        encoding=encoding,
        diagnostic=diagnostic,
    )
    return ConversionRunner(registry).run(context)
