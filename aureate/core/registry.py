"""Output formats known to the converter, keyed by their command-line name."""
from __future__ import annotations

from typing import Callable, Dict, List

from aureate.errors import ConfigError

from .context import EmitterCallable, EmitterDefinition


def format_key(name: str | None) -> str:
    """Normalise a user supplied format name (``" JSON "`` -> ``"json"``)."""

    return (name or "").strip().lower()


class EmitterRegistry:
    """Output format name -> emitter, in registration order (the CLI's choices)."""

    def __init__(self) -> None:
        self._emitters: Dict[str, EmitterDefinition] = {}

    def register(self, name: str, func: EmitterCallable, description: str = "") -> EmitterCallable:
        key = format_key(name)
        if not key:
            raise ValueError("An output format needs a name")
        if key in self._emitters:
            raise ValueError(f"Output format '{key}' is already registered")
        self._emitters[key] = EmitterDefinition(
            name=key,
            callable=func,
            description=description,
            module=func.__module__,
        )
        return func

    def get(self, name: str | None) -> EmitterDefinition:
        """Return the emitter for *name*; unknown formats are a configuration error."""

        definition = self._emitters.get(format_key(name))
        if definition is None:
            raise ConfigError(
                f"Unknown output format {name!r}, expected one of: {', '.join(self.names())}"
            )
        return definition

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and format_key(name) in self._emitters

    def names(self) -> List[str]:
        return list(self._emitters)


registry = EmitterRegistry()


def register_emitter(name: str, description: str = "") -> Callable[[EmitterCallable], EmitterCallable]:
    """Register the decorated function as the emitter for output format *name*."""

    def decorator(func: EmitterCallable) -> EmitterCallable:
        return registry.register(name, func, description=description)

    return decorator
