"""Per-field scalar type inference.

Precedence, first match wins: empty -> None, true/false -> bool,
signed 64-bit integer -> int, float literal -> float, anything else -> str.
Inference looks at one field only; the column and earlier rows never matter.
"""
from __future__ import annotations

import re
from typing import List, Sequence, Union

TypedValue = Union[None, bool, int, float, str]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_BOOL_LITERALS = {"true": True, "false": False}
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"""
    [+-]?
    (?:
        (?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?
      | inf(?:inity)?
      | nan
    )
    """,
    re.IGNORECASE | re.VERBOSE,
)


def infer_value(raw: str) -> TypedValue:
    """Return the typed scalar for *raw*; never raises."""

    if raw == "":
        return None

    literal = _BOOL_LITERALS.get(raw.lower())
    if literal is not None:
        return literal

    if _INT_PATTERN.fullmatch(raw):
        # Significant digits beyond 19 always overflow int64.
        if len(raw.lstrip("+-").lstrip("0")) <= 19:
            number = int(raw)
            if INT64_MIN <= number <= INT64_MAX:
                return number
        # Out of range: fall through and read it as a float.

    if _FLOAT_PATTERN.fullmatch(raw):
        return float(raw)

    return raw


def infer_row(fields: Sequence[str]) -> List[TypedValue]:
    return [infer_value(field) for field in fields]


def canonical_text(value: TypedValue) -> str:
    """Minimal string form that :func:`infer_value` maps back to *value*."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    return str(value)


__all__ = ["INT64_MAX", "INT64_MIN", "TypedValue", "canonical_text", "infer_row", "infer_value"]
