"""Output formats; importing this package registers every emitter."""
from __future__ import annotations

from .emitters import checked_records, emit_json, emit_pretty_json, emit_yaml
from .sinks import open_sink

__all__ = ["checked_records", "emit_json", "emit_pretty_json", "emit_yaml", "open_sink"]
