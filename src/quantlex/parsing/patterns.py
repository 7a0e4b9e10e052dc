"""
quantlex.parsing.patterns
=========================

Regular expressions for "a number in this culture, optional whitespace, one
of this unit's abbreviations".

Anchored patterns (``match_entire_string=True``) capture the number as
``value`` and the abbreviation as ``unit``. Unanchored fragments use
non-capturing groups only so several can be embedded into one composite
pattern, where each part is wrapped in its own ``partN`` group.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from quantlex.core.errors import AbbreviationNotFound, NoAbbreviationsForUnit
from quantlex.core.quantity_type import CompositeGrammar, QuantityType
from quantlex.core.unit import Unit
from quantlex.parsing.abbreviations import AbbreviationResolver, get_default_resolver
from quantlex.parsing.culture import Culture, CultureCatalog
from quantlex.parsing.culture import number_pattern as _number_pattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParsePattern:
    """A compiled pattern plus what each named group stands for.

    ``groups`` maps a capture group name to ``(quantity type, unit)``.
    """

    regex: "re.Pattern[str]"
    source: str
    groups: Mapping[str, Tuple[str, str]]

    def match(self, text: str) -> "re.Match[str] | None":
        return self.regex.match(text)


class PatternBuilder:
    """Build and cache parse patterns on top of an `AbbreviationResolver`."""

    def __init__(self, resolver: Optional[AbbreviationResolver] = None, cultures: Optional[CultureCatalog] = None) -> None:
        self._resolver = get_default_resolver() if resolver is None else resolver
        self._cultures = self._resolver.cultures if cultures is None else cultures
        self._lock = threading.RLock()
        self._units: Dict[Tuple[str, str, str], ParsePattern] = {}
        self._composites: Dict[Tuple[str, str, str], ParsePattern] = {}

    @property
    def resolver(self) -> AbbreviationResolver:
        return self._resolver

    def _culture(self, culture: "Culture | str | None") -> Culture:
        return self._cultures.resolve(culture)

    def number_pattern(self, culture: "Culture | str | None" = None) -> str:
        return _number_pattern(self._culture(culture).number_format)

    def build_unit_pattern(
        self,
        quantity_type: "QuantityType | str",
        unit: "Unit | str",
        culture: "Culture | str | None" = None,
        match_entire_string: bool = True,
    ) -> str:
        """Return the regex source for ``unit`` in ``culture``.

        Raises `NoAbbreviationsForUnit` if the unit has no abbreviation in
        the culture or its fallback.
        """
        c = self._culture(culture)
        qtype = self._resolver.table.get(quantity_type)
        u = qtype.unit(unit)
        try:
            symbols = self._resolver.abbreviations_for(qtype, u, c)
        except AbbreviationNotFound as exc:
            raise NoAbbreviationsForUnit(exc.quantity_type, exc.unit, exc.culture) from exc

        number = _number_pattern(c.number_format)
        alternation = "|".join(re.escape(s) for s in symbols)
        if match_entire_string:
            return rf"^(?P<value>{number})\s*(?P<unit>{alternation})$"
        return rf"(?:{number})\s*(?:{alternation})"

    def unit_pattern(
        self,
        quantity_type: "QuantityType | str",
        unit: "Unit | str",
        culture: "Culture | str | None" = None,
    ) -> ParsePattern:
        """Compiled, anchored pattern for ``unit`` (cached per culture)."""
        c = self._culture(culture)
        qtype = self._resolver.table.get(quantity_type)
        u = qtype.unit(unit)
        key = (qtype.name, u.name, c.name)
        cached = self._units.get(key)
        if cached is not None:
            return cached

        source = self.build_unit_pattern(qtype, u, c)
        pattern = ParsePattern(re.compile(source), source, {"unit": (qtype.name, u.name)})
        logger.debug("Compiled pattern for %s.%s in %s", qtype.name, u.name, c.name)
        with self._lock:
            return self._units.setdefault(key, pattern)

    def composite_pattern(
        self,
        quantity_type: "QuantityType | str",
        grammar: "CompositeGrammar | str | None" = None,
        culture: "Culture | str | None" = None,
    ) -> ParsePattern:
        """Compiled, anchored pattern for a composite grammar of ``quantity_type``.

        Parts are joined by their separators and captured as ``part0``,
        ``part1``, ... in grammar order.
        """
        c = self._culture(culture)
        qtype = self._resolver.table.get(quantity_type)
        if not isinstance(grammar, CompositeGrammar):
            grammar = qtype.composite(grammar)
        key = (qtype.name, grammar.name, c.name)
        cached = self._composites.get(key)
        if cached is not None:
            return cached

        pieces = []
        groups: Dict[str, Tuple[str, str]] = {}
        last = len(grammar.parts) - 1
        for i, part in enumerate(grammar.parts):
            fragment = self.build_unit_pattern(qtype, part.unit, c, match_entire_string=False)
            pieces.append(f"(?P<part{i}>{fragment})")
            if i != last:
                pieces.append(part.separator)
            groups[f"part{i}"] = (qtype.name, part.unit)
        source = "^" + "".join(pieces) + "$"
        pattern = ParsePattern(re.compile(source), source, groups)
        logger.debug("Compiled composite pattern %s for %s in %s", grammar.name, qtype.name, c.name)
        with self._lock:
            return self._composites.setdefault(key, pattern)


__all__ = ["ParsePattern", "PatternBuilder"]
