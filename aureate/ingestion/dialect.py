"""CSV dialect configuration shared read-only by the row reader."""
from __future__ import annotations

import csv
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict

from aureate.errors import ConfigError

_LINE_BREAKS = {"\r", "\n"}
_CHAR_ESCAPES = {"\\t": "\t"}


class TrimPolicy(IntEnum):
    """Which field boundaries have whitespace stripped after dequoting."""

    NONE = 0
    LEADING = 1
    TRAILING = 2
    BOTH = 3

    @classmethod
    def parse(cls, value: "TrimPolicy | int | str") -> "TrimPolicy":
        """Accept an enum member, its integer code, or its lowercase name."""

        if isinstance(value, TrimPolicy):
            return value
        text = str(value).strip().lower()
        if text.isdigit():
            try:
                return cls(int(text))
            except ValueError as exc:
                raise ConfigError(f"Invalid trim setting {value!r}, expected 0-3") from exc
        try:
            return cls[text.upper()]
        except KeyError as exc:
            choices = ", ".join(f"{m.value}|{m.name.lower()}" for m in cls)
            raise ConfigError(f"Invalid trim setting {value!r}, expected one of: {choices}") from exc

    def apply(self, field: str) -> str:
        if self is TrimPolicy.LEADING:
            return field.lstrip()
        if self is TrimPolicy.TRAILING:
            return field.rstrip()
        if self is TrimPolicy.BOTH:
            return field.strip()
        return field


class QuotePolicy(str, Enum):
    """Quote handling that can be switched off from the command line."""

    NONE = "none"        # quoting and doubled quotes both honoured
    DOUBLE = "double"    # "" inside a quoted field is no longer an escape
    ALL = "all"          # quote characters are ordinary data

    @classmethod
    def parse(cls, value: "QuotePolicy | str | None") -> "QuotePolicy":
        if value is None:
            return cls.NONE
        if isinstance(value, QuotePolicy):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ConfigError(
                f"Invalid disable-quotes setting {value!r}, expected 'double' or 'all'"
            ) from exc


def parse_char(value: str | None, option: str, *, required: bool = False) -> str | None:
    """Validate a single-character option; ``\\t`` is accepted for tab."""

    if value is None or value == "":
        if required:
            raise ConfigError(f"Option {option!r} requires a character")
        return None
    return _check_char(_CHAR_ESCAPES.get(value, value), option)


def _check_char(value: str, option: str) -> str:
    if not isinstance(value, str) or len(value) != 1:
        raise ConfigError(f"Option {option!r} takes exactly one character, got {value!r}")
    if value in _LINE_BREAKS:
        raise ConfigError(f"Option {option!r} cannot be a line break")
    return value


@dataclass(frozen=True, slots=True)
class DialectConfig:
    """Validated lexical rules for splitting CSV input into rows and fields."""

    delimiter: str = ","
    quote: str = '"'
    escape: str | None = None
    comment: str | None = None
    trim: TrimPolicy = TrimPolicy.NONE
    disable_quotes: QuotePolicy = QuotePolicy.NONE
    flexible: bool = False

    def __post_init__(self) -> None:
        _check_char(self.delimiter, "delimiter")
        _check_char(self.quote, "quote")
        if self.escape is not None:
            _check_char(self.escape, "escape")
        if self.comment is not None:
            _check_char(self.comment, "comment")
        if not isinstance(self.trim, TrimPolicy):
            raise ConfigError(f"Invalid trim setting {self.trim!r}")
        if not isinstance(self.disable_quotes, QuotePolicy):
            raise ConfigError(f"Invalid disable-quotes setting {self.disable_quotes!r}")

        named = {"delimiter": self.delimiter, "quote": self.quote}
        if self.escape is not None:
            named["escape"] = self.escape
        seen: Dict[str, str] = {}
        for option, char in named.items():
            if char in seen:
                raise ConfigError(
                    f"The {seen[char]} and {option} characters must differ (both {char!r})"
                )
            seen[char] = option
        if self.comment is not None and self.comment in (self.delimiter, self.quote):
            raise ConfigError(
                f"The comment character {self.comment!r} collides with the delimiter or quote"
            )

    @classmethod
    def from_options(
        cls,
        *,
        delimiter: str | None = ",",
        quote: str | None = '"',
        escape: str | None = None,
        comment: str | None = None,
        trim: "TrimPolicy | int | str" = TrimPolicy.NONE,
        disable_quotes: "QuotePolicy | str | None" = None,
        flexible: bool = False,
    ) -> "DialectConfig":
        """Build a dialect from raw user-facing option values."""

        return cls(
            delimiter=parse_char(delimiter, "delimiter", required=True),
            quote=parse_char(quote, "quote", required=True),
            escape=parse_char(escape, "escape"),
            comment=parse_char(comment, "comment"),
            trim=TrimPolicy.parse(trim),
            disable_quotes=QuotePolicy.parse(disable_quotes),
            flexible=bool(flexible),
        )

    @property
    def quoted_escape(self) -> str | None:
        """Escape character in effect, which only ever applies inside quoted fields."""

        if self.disable_quotes is QuotePolicy.ALL:
            return None
        return self.escape

    def csv_options(self) -> Dict[str, Any]:
        """Return keyword arguments for :func:`csv.reader`.

        :mod:`csv` also honours ``escapechar`` outside quotes; the row reader
        doubles escape characters found there so they stay literal.
        """

        return {
            "delimiter": self.delimiter,
            "quotechar": self.quote,
            "escapechar": self.quoted_escape,
            "doublequote": self.disable_quotes is QuotePolicy.NONE,
            "quoting": csv.QUOTE_NONE if self.disable_quotes is QuotePolicy.ALL else csv.QUOTE_MINIMAL,
            "skipinitialspace": False,
            "strict": False,
        }


DEFAULT_DIALECT = DialectConfig()


__all__ = ["DEFAULT_DIALECT", "DialectConfig", "QuotePolicy", "TrimPolicy", "parse_char"]
