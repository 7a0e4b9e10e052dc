"""
quantlex.parsing.formatter
==========================

Quantity -> text, in a form `QuantityParser.parse` reads back exactly:
the shortest round-tripping decimal in the culture's number format, a space,
and the unit's default abbreviation for that culture.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from quantlex.core.quantity import Quantity
from quantlex.core.unit import Unit
from quantlex.parsing.abbreviations import AbbreviationResolver, get_default_resolver
from quantlex.parsing.culture import Culture, CultureCatalog, format_number


class QuantityFormatter:
    def __init__(self, resolver: Optional[AbbreviationResolver] = None, cultures: Optional[CultureCatalog] = None) -> None:
        self._resolver = get_default_resolver() if resolver is None else resolver
        self._cultures = self._resolver.cultures if cultures is None else cultures

    def format(
        self,
        quantity: Quantity,
        culture: "Culture | str | None" = None,
        unit: "Unit | str | None" = None,
        digits: Optional[int] = None,
    ) -> str:
        """Format ``quantity``, optionally converted to ``unit`` first.

        ``digits=None`` keeps every significant digit; pass an int to round
        for display (the text then no longer round-trips exactly).
        """
        c = self._cultures.resolve(culture)
        q = quantity if unit is None else quantity.to(unit)
        number = format_number(q.value, c.number_format, digits)
        abbreviation = self._resolver.default_abbreviation(q.quantity_type, q.unit, c)
        return f"{number} {abbreviation}"


@lru_cache(maxsize=None)
def get_default_formatter() -> QuantityFormatter:
    return QuantityFormatter()


__all__ = ["QuantityFormatter", "get_default_formatter"]
