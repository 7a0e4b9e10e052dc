"""
quantlex.parsing.culture
========================

Explicit number-format configuration. A culture is an opaque name bound to a
`NumberFormat`; nothing here reads the process locale.
"""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from functools import lru_cache
from math import isfinite
from typing import Dict, Iterable, Optional, Tuple

from quantlex.core.errors import UnknownCultureError

DEFAULT_CULTURE_NAME = "en-US"

NBSP = "\u00a0"
MINUS_SIGN = "\u2212"


@dataclass(frozen=True, slots=True)
class NumberFormat:
    """How numbers are written in a culture.

    ``group_separator`` may be None (no digit grouping accepted). It must
    differ from ``decimal_separator`` so that "1,234" can never mean both.
    """

    decimal_separator: str = "."
    group_separator: Optional[str] = ","
    negative_sign: str = "-"

    def __post_init__(self) -> None:
        if not self.decimal_separator:
            raise ValueError("decimal_separator must be a non-empty string")
        if not self.negative_sign:
            raise ValueError("negative_sign must be a non-empty string")
        if self.group_separator == "":
            object.__setattr__(self, "group_separator", None)
        if self.group_separator is not None and self.group_separator == self.decimal_separator:
            raise ValueError(
                f"group separator {self.group_separator!r} collides with the decimal separator"
            )
        for sep in (self.decimal_separator, self.group_separator):
            if sep is not None and any(ch.isdigit() for ch in sep):
                raise ValueError(f"separator {sep!r} must not contain digits")


@dataclass(frozen=True, slots=True)
class Culture:
    name: str
    number_format: NumberFormat

    def __str__(self) -> str:
        return self.name


# ---------------------------------------------------------------------------
# Number pattern / parse / format
# ---------------------------------------------------------------------------

@lru_cache(maxsize=64)
def number_pattern(fmt: NumberFormat) -> str:
    """Regex fragment (no capturing groups) matching a number in ``fmt``."""
    dec = re.escape(fmt.decimal_separator)
    sign = f"(?:{re.escape(fmt.negative_sign)}|\\+)?"
    if fmt.group_separator is not None:
        grp = re.escape(fmt.group_separator)
        integer = rf"(?:\d{{1,3}}(?:{grp}\d{{3}})+|\d+)"
    else:
        integer = r"\d+"
    mantissa = rf"(?:{integer}(?:{dec}\d*)?|{dec}\d+)"
    exponent = r"(?:[eE][+\-]?\d+)?"
    return f"{sign}{mantissa}{exponent}"


@lru_cache(maxsize=64)
def _number_re(fmt: NumberFormat) -> "re.Pattern[str]":
    return re.compile(f"^{number_pattern(fmt)}$")


def parse_number(text: str, fmt: NumberFormat) -> float:
    """Read ``text`` written in ``fmt``. Raises `ValueError` if it is not a number."""
    s = text.strip()
    if not _number_re(fmt).match(s):
        raise ValueError(f"Not a number in this culture: {text!r}")
    negative = s.startswith(fmt.negative_sign)
    if negative:
        s = s[len(fmt.negative_sign):]
    elif s.startswith("+"):
        s = s[1:]
    if fmt.group_separator is not None:
        s = s.replace(fmt.group_separator, "")
    s = s.replace(fmt.decimal_separator, ".")
    value = float(s)
    if not isfinite(value):
        raise ValueError(f"Number out of range: {text!r}")
    return -value if negative else value


def _group(digits: str, sep: str) -> str:
    head = len(digits) % 3 or 3
    parts = [digits[:head]] + [digits[i:i + 3] for i in range(head, len(digits), 3)]
    return sep.join(parts)


def format_number(value: float, fmt: NumberFormat, digits: Optional[int] = None, grouping: bool = False) -> str:
    """Write ``value`` in ``fmt``.

    With ``digits=None`` the shortest text that reads back to the same float
    is produced (``repr``); otherwise the value is rounded to ``digits``
    decimals. ``grouping`` inserts group separators into the integer part.
    """
    negative = value < 0
    magnitude = abs(value)
    body = repr(float(magnitude)) if digits is None else f"{magnitude:.{digits}f}"
    if body.endswith(".0") and digits is None:
        body = body[:-2]

    mantissa, e, exp = body.partition("e")
    int_part, dot, frac = mantissa.partition(".")
    if grouping and fmt.group_separator is not None:
        int_part = _group(int_part, fmt.group_separator)
    text = int_part + (fmt.decimal_separator + frac if dot else "") + (e + exp if e else "")
    if negative and any(ch in "123456789" for ch in mantissa):
        text = fmt.negative_sign + text
    return text


# ---------------------------------------------------------------------------
# Culture catalog
# ---------------------------------------------------------------------------

class CultureCatalog:
    """Named cultures, thread-safe. ``resolve(None)`` returns the default."""

    def __init__(self, cultures: Iterable[Culture] = (), default: str = DEFAULT_CULTURE_NAME) -> None:
        self._lock = threading.RLock()
        self._cultures: Dict[str, Culture] = {}
        for c in cultures:
            self.register(c)
        self._default = default

    def __contains__(self, name: object) -> bool:
        return name in self._cultures

    @property
    def default(self) -> Culture:
        return self.get(self._default)

    def register(self, culture: Culture, replace: bool = False) -> None:
        with self._lock:
            if not replace and culture.name in self._cultures:
                raise ValueError(f"Culture {culture.name!r} is already registered")
            self._cultures[culture.name] = culture

    def get(self, name: str) -> Culture:
        with self._lock:
            culture = self._cultures.get(name)
        if culture is None:
            raise UnknownCultureError(name)
        return culture

    def resolve(self, culture: "Culture | str | None", default: "Culture | str | None" = None) -> Culture:
        if culture is None:
            culture = default if default is not None else self._default
        if isinstance(culture, Culture):
            return culture
        return self.get(culture)

    def names(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._cultures)


def _bootstrap_default_cultures() -> CultureCatalog:
    return CultureCatalog((
        Culture("en-US", NumberFormat(".", ",", "-")),
        Culture("en-GB", NumberFormat(".", ",", "-")),
        Culture("de-DE", NumberFormat(",", ".", "-")),
        Culture("ru-RU", NumberFormat(",", NBSP, "-")),
        Culture("nb-NO", NumberFormat(",", NBSP, MINUS_SIGN)),
    ))


DEFAULT_CULTURES: CultureCatalog = _bootstrap_default_cultures()


__all__ = [
    "NumberFormat",
    "Culture",
    "CultureCatalog",
    "DEFAULT_CULTURES",
    "DEFAULT_CULTURE_NAME",
    "number_pattern",
    "parse_number",
    "format_number",
]
