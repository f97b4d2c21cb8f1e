from __future__ import annotations

import io
import json
import math

import pytest
import yaml

from aureate import convert
from aureate.errors import EncodingError, StreamError
from aureate.export.emitters import emit_json, emit_pretty_json, emit_yaml
from aureate.ingestion.dialect import DialectConfig


def _convert(text: str, output_format: str, **dialect_options) -> str:
    sink = io.StringIO()
    convert([io.StringIO(text)], sink, output_format, DialectConfig.from_options(**dialect_options))
    return sink.getvalue()


def test_compact_json_matches_reference_output() -> None:
    output = _convert('a,b,c\n1,"hello, world",true\n', "json")
    assert output == '[{"a":1,"b":"hello, world","c":true}]'


def test_pretty_json_layout() -> None:
    output = _convert("a,b\n1,x\n2.5,\n", "prettyj")
    assert output == (
        "[\n"
        "  {\n"
        '    "a": 1,\n'
        '    "b": "x"\n'
        "  },\n"
        "  {\n"
        '    "a": 2.5,\n'
        '    "b": null\n'
        "  }\n"
        "]"
    )
    assert json.loads(output) == [{"a": 1, "b": "x"}, {"a": 2.5, "b": None}]


def test_flexible_short_row_serializes_null() -> None:
    output = _convert("a,b,c\n1,2\n", "json", flexible=True)
    assert output == '[{"a":1,"b":2,"c":null}]'


def test_unquoted_backslashes_survive_an_escape_character() -> None:
    output = _convert("path,n\nC:\\temp,2\n", "json", escape="\\")
    assert json.loads(output) == [{"path": "C:\\temp", "n": 2}]


def test_non_ascii_and_escapes_are_preserved() -> None:
    output = _convert('name,note\nJosé,"say ""hi""\nbye"\n', "json")
    assert output == '[{"name":"José","note":"say \\"hi\\"\\nbye"}]'


@pytest.mark.parametrize("output_format", ["json", "prettyj"])
def test_header_only_json_is_empty_array(output_format: str) -> None:
    assert _convert("a,b,c\n", output_format) == "[]"


def test_header_only_yaml_is_empty_sequence() -> None:
    output = _convert("a,b,c\n", "yaml")
    assert output == "[]\n"
    assert yaml.safe_load(output) == []


def test_yaml_preserves_order_and_types() -> None:
    output = _convert("z,a,flag,word\n1,2.5,false,yes\n,x,true,007x\n", "yaml")
    assert output.startswith("- z: 1\n  a: 2.5\n  flag: false\n")
    assert yaml.safe_load(output) == [
        {"z": 1, "a": 2.5, "flag": False, "word": "yes"},
        {"z": None, "a": "x", "flag": True, "word": "007x"},
    ]


@pytest.mark.parametrize("emitter", [emit_json, emit_pretty_json, emit_yaml])
@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_floats_raise_encoding_error(emitter, value: float) -> None:
    records = [{"a": 1.0}, {"a": value}]
    with pytest.raises(EncodingError) as excinfo:
        emitter(records, io.StringIO())
    assert excinfo.value.column == "a"
    assert excinfo.value.record == 2


def test_nan_cell_fails_conversion() -> None:
    with pytest.raises(EncodingError):
        _convert("a\nNaN\n", "json")


def test_yaml_writes_nothing_when_encoding_fails() -> None:
    sink = io.StringIO()
    with pytest.raises(EncodingError):
        emit_yaml([{"a": 1}, {"a": math.inf}], sink)
    assert sink.getvalue() == ""


def test_json_streams_records_before_reading_the_next() -> None:
    sink = io.StringIO()
    seen = []

    def records():
        yield {"a": 1}
        seen.append(sink.getvalue())
        yield {"a": 2}

    assert emit_json(records(), sink) == 2
    assert seen == ['[{"a":1}']
    assert sink.getvalue() == '[{"a":1},{"a":2}]'


class _BrokenSink(io.StringIO):
    name = "broken"

    def write(self, text: str) -> int:
        raise BrokenPipeError("pipe closed")


def test_sink_failures_raise_stream_error() -> None:
    with pytest.raises(StreamError) as excinfo:
        emit_json([{"a": 1}], _BrokenSink())
    assert excinfo.value.target == "broken"
    assert isinstance(excinfo.value.__cause__, BrokenPipeError)


def test_emitters_flush_the_sink() -> None:
    class _Recorder(io.StringIO):
        flushed = False

        def flush(self) -> None:
            self.flushed = True
            super().flush()

    for emitter in (emit_json, emit_pretty_json, emit_yaml):
        sink = _Recorder()
        emitter([{"a": 1}], sink)
        assert sink.flushed


@pytest.mark.parametrize("emitter", [emit_json, emit_pretty_json, emit_yaml])
def test_unencodable_output_raises_stream_error(emitter) -> None:
    sink = io.TextIOWrapper(io.BytesIO(), encoding="ascii")
    with pytest.raises(StreamError) as excinfo:
        emitter([{"name": "Zoë"}], sink)
    assert excinfo.value.target == "output"
    assert isinstance(excinfo.value.__cause__, UnicodeEncodeError)
