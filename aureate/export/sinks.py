"""Output destination handling for conversions."""
from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, TextIO

from aureate.errors import StreamError

logger = logging.getLogger(__name__)


@contextmanager
def open_sink(
    path: Path | str | None,
    *,
    append: bool = False,
    encoding: str = "utf-8",
) -> Iterator[TextIO]:
    """Yield the output stream: stdout when *path* is ``None``, else a file.

    Standard output is left open for the caller. Append mode has no effect
    on stdout.
    """

    if path is None:
        logger.info("No output file given, writing to stdout...")
        yield sys.stdout
        return

    target = Path(path)
    mode = "a" if append else "w"
    logger.info("Attempting to %s %s...", "append to" if append else "create", target)
    try:
        handle = target.open(mode, encoding=encoding)
    except OSError as exc:
        raise StreamError(str(target), str(exc)) from exc
    try:
        yield handle
    finally:
        try:
            handle.close()
        except (OSError, UnicodeEncodeError) as exc:
            raise StreamError(str(target), str(exc)) from exc


__all__ = ["open_sink"]
