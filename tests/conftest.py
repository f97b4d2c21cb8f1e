from __future__ import annotations

import io
from pathlib import Path
from typing import Callable

import pytest

from aureate import bootstrap
from aureate.core.context import ConversionContext
from aureate.ingestion.dialect import DialectConfig
from aureate.settings import Settings

bootstrap()


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the developer's environment."""

    return Settings(output_format="json", encoding="utf-8", log_level="WARNING")


@pytest.fixture
def csv_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write CSV text to a temporary file and return its path."""

    def _write(text: str, name: str = "input.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8", newline="")
        return path

    return _write


@pytest.fixture
def conversion_context() -> ConversionContext:
    """Context over a small in-memory CSV writing to an in-memory sink."""

    return ConversionContext(
        sources=[io.StringIO("a,b,c\n1,\"hello, world\",true\n")],
        sink=io.StringIO(),
        output_format="json",
        dialect=DialectConfig(),
    )
