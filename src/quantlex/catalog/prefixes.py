"""
quantlex.catalog.prefixes
=========================

Metric prefixes a unit may declare. A prefix contributes a scale factor to
the synthesized unit and a symbol to its abbreviations; symbols can be
localized per culture (ru-RU writes kilo as "к").
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Tuple


@dataclass(frozen=True, slots=True)
class Prefix:
    name: str
    symbol: str
    factor: float
    # Extra spellings accepted when parsing (first symbol stays the default).
    alternatives: Tuple[str, ...] = ()
    localized: Tuple[Tuple[str, Tuple[str, ...]], ...] = field(default=())

    def symbols_in(self, culture: str) -> Tuple[str, ...]:
        """Symbols for ``culture``, falling back to the invariant ones."""
        for c, symbols in self.localized:
            if c == culture:
                return symbols
        return (self.symbol,) + self.alternatives


def _ru(*symbols: str) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
    return (("ru-RU", symbols),)


PREFIXES: Tuple[Prefix, ...] = (
    Prefix("Nano",  "n",  1e-9, localized=_ru("н")),
    # U+00B5 MICRO SIGN first, U+03BC GREEK SMALL LETTER MU accepted too
    Prefix("Micro", "µ",  1e-6, alternatives=("μ",), localized=_ru("мк")),
    Prefix("Milli", "m",  1e-3, localized=_ru("м")),
    Prefix("Centi", "c",  1e-2, localized=_ru("с")),
    Prefix("Deci",  "d",  1e-1, localized=_ru("д")),
    Prefix("Deca",  "da", 1e1,  localized=_ru("да")),
    Prefix("Hecto", "h",  1e2,  localized=_ru("г")),
    Prefix("Kilo",  "k",  1e3,  localized=_ru("к")),
    Prefix("Mega",  "M",  1e6,  localized=_ru("М")),
    Prefix("Giga",  "G",  1e9,  localized=_ru("Г")),
)

PREFIXES_BY_NAME: Mapping[str, Prefix] = {p.name: p for p in PREFIXES}


def get_prefix(name: str, prefixes: Mapping[str, Prefix] = PREFIXES_BY_NAME) -> Prefix:
    try:
        return prefixes[name]
    except KeyError:
        raise ValueError(f"Unknown prefix: {name!r}") from None

