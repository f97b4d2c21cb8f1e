"""Input source resolution for the row reader."""
from __future__ import annotations

import io
import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, TextIO

from aureate.errors import StreamError

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


@dataclass(frozen=True, slots=True)
class InputSource:
    """A file path or, when ``path`` is ``None``, standard input."""

    path: Path | None = None

    @property
    def is_stdin(self) -> bool:
        return self.path is None

    @property
    def label(self) -> str:
        if self.path is None:
            return "stdin"
        return self.path.name or str(self.path)

    @contextmanager
    def open(self, encoding: str = "utf-8") -> Iterator[TextIO]:
        """Yield a text stream suitable for :func:`csv.reader` (``newline=""``)."""

        if self.path is None:
            logger.info("Reading CSV from stdin...")
            buffer = getattr(sys.stdin, "buffer", None)
            if buffer is None:
                yield sys.stdin
                return
            wrapper = io.TextIOWrapper(buffer, encoding=encoding, newline="")
            try:
                yield wrapper
            finally:
                # Leave the process-wide stdin buffer open.
                wrapper.detach()
            return

        logger.info("Attempting to read from %s...", self.path)
        try:
            handle = self.path.open("r", encoding=encoding, newline="")
        except OSError as exc:
            raise StreamError(self.label, str(exc)) from exc
        with handle:
            yield handle


def resolve_sources(values: Iterable[str] | None) -> List[InputSource]:
    """Map CLI input strings to sources, preserving order; ``-`` is stdin."""

    sources: List[InputSource] = []
    seen_stdin = False
    for value in values or ():
        if value == STDIN_MARKER:
            if seen_stdin:
                logger.warning("Standard input listed more than once; reading it only once")
                continue
            seen_stdin = True
            sources.append(InputSource())
            continue
        sources.append(InputSource(Path(value)))
    if not sources:
        logger.info("No input source given, defaulting to stdin...")
        sources.append(InputSource())
    return sources


__all__ = ["InputSource", "STDIN_MARKER", "resolve_sources"]
