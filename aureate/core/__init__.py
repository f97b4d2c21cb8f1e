"""Core orchestration utilities for the aureate runtime."""
from __future__ import annotations

from .context import ConversionContext, ConversionSummary, EmitterDefinition
from .registry import EmitterRegistry, register_emitter, registry
from .runner import ConversionRunner

__all__ = [
    "ConversionContext",
    "ConversionRunner",
    "ConversionSummary",
    "EmitterDefinition",
    "EmitterRegistry",
    "register_emitter",
    "registry",
]
