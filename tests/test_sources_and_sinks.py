from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from aureate.errors import StreamError
from aureate.export.sinks import open_sink
from aureate.ingestion.reader import read_rows
from aureate.ingestion.sources import InputSource, resolve_sources


def test_resolve_sources_defaults_to_stdin() -> None:
    assert resolve_sources(None) == [InputSource()]
    assert resolve_sources([]) == [InputSource()]


def test_resolve_sources_collapses_repeated_stdin() -> None:
    sources = resolve_sources(["-", "a.csv", "-", "b.csv"])
    assert sources == [InputSource(), InputSource(Path("a.csv")), InputSource(Path("b.csv"))]
    assert [source.label for source in sources] == ["stdin", "a.csv", "b.csv"]


def test_stdin_source_reads_process_stdin(monkeypatch) -> None:
    fake = io.TextIOWrapper(io.BytesIO(b"a,b\r\n1,\"x\r\ny\"\r\n"), encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", fake)

    rows = list(read_rows([InputSource()]))

    assert rows == [["a", "b"], ["1", "x\r\ny"]]
    assert not fake.buffer.closed


def test_open_sink_defaults_to_stdout() -> None:
    with open_sink(None) as sink:
        assert sink is sys.stdout


def test_open_sink_overwrites_or_appends(tmp_path: Path) -> None:
    target = tmp_path / "out.json"
    target.write_text("old", encoding="utf-8")

    with open_sink(target) as sink:
        sink.write("new")
    assert target.read_text(encoding="utf-8") == "new"

    with open_sink(target, append=True) as sink:
        sink.write("+more")
    assert target.read_text(encoding="utf-8") == "new+more"


def test_open_sink_failure_is_stream_error(tmp_path: Path) -> None:
    with pytest.raises(StreamError):
        with open_sink(tmp_path / "missing" / "out.json"):
            pass  # pragma: no cover - never entered


class _CloseFailsOnce(io.StringIO):
    def close(self) -> None:
        if not self.closed:
            super().close()
            raise OSError("No space left on device")


def test_open_sink_close_failure_is_stream_error(tmp_path: Path, monkeypatch) -> None:
    target = tmp_path / "out.json"
    monkeypatch.setattr(Path, "open", lambda self, *args, **kwargs: _CloseFailsOnce())

    with pytest.raises(StreamError) as excinfo:
        with open_sink(target) as sink:
            sink.write("[]")
    assert excinfo.value.target == str(target)
    assert "No space left" in str(excinfo.value)
