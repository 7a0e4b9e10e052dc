"""
quantlex.parsing.parser
=======================

Text -> `Quantity`.

Parsing goes in two stages:

1. Single unit. The trimmed text is matched against the anchored pattern of
   every unit of the quantity type, in declaration order. The first match
   wins, so when two units share an abbreviation ("gal") the one declared
   first in the table is chosen, every time.
2. Composite. If no single unit matched and the quantity type registers
   composite grammars (feet + inches), each grammar's pattern is tried. Every
   captured part is parsed with stage 1 against its own sub-unit and the
   parts are added together.

A leading sign belongs to the first part only: "-2 ft 4 in" is
``-(2 ft) + 4 in``, i.e. -1 ft 8 in.

`attempt` returns a `ParseOutcome` describing what happened; `try_parse`
and `parse` are thin wrappers around it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, List, Optional, Tuple

from quantlex.catalog.registry import UnitDefinitionTable
from quantlex.core.errors import (
    AmbiguousUnitError,
    NoAbbreviationsForUnit,
    QuantityFormatError,
)
from quantlex.core.quantity import Quantity
from quantlex.core.quantity_type import CompositeGrammar, QuantityType
from quantlex.core.unit import Unit
from quantlex.parsing.abbreviations import AbbreviationResolver, normalize
from quantlex.parsing.culture import DEFAULT_CULTURES, Culture, CultureCatalog, parse_number
from quantlex.parsing.patterns import ParsePattern, PatternBuilder

logger = logging.getLogger(__name__)

SINGLE = "single"
COMPOSITE = "composite"


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """Why a parse failed: the input and every (unit or grammar, pattern) tried."""

    text: Any
    quantity_type: str
    culture: str
    attempted: Tuple[Tuple[str, str], ...] = ()
    reason: str = "no pattern matched"

    def __str__(self) -> str:
        tried = ", ".join(name for name, _ in self.attempted) or "nothing"
        return f"Unable to parse {self.text!r} as {self.quantity_type} ({self.culture}): {self.reason}; tried {tried}"


@dataclass(frozen=True, slots=True)
class ParseOutcome:
    success: bool
    quantity: Optional[Quantity] = None
    path: Optional[str] = None
    matched: Optional[str] = None
    failure: Optional[ParseFailure] = None


@dataclass
class _Attempts:
    items: List[Tuple[str, str]] = field(default_factory=list)

    def add(self, name: str, pattern: ParsePattern) -> None:
        self.items.append((name, pattern.source))


class QuantityParser:
    """Culture-aware parser over a `UnitDefinitionTable`.

    Parameters
    ----------
    table : UnitDefinitionTable, optional
        Defaults to the shipped table.
    cultures : CultureCatalog, optional
        Defaults to the shipped cultures (en-US, en-GB, de-DE, ru-RU, nb-NO).
    default_culture : str, optional
        Culture used when a call passes ``culture=None``. Defaults to the
        catalog's default (en-US).
    builder : PatternBuilder, optional
        Supply one to share its pattern cache between parsers.
    """

    def __init__(
        self,
        table: Optional[UnitDefinitionTable] = None,
        cultures: Optional[CultureCatalog] = None,
        default_culture: Optional[str] = None,
        builder: Optional[PatternBuilder] = None,
    ) -> None:
        if builder is None:
            if table is None and cultures is None:
                builder = PatternBuilder()
            else:
                builder = PatternBuilder(AbbreviationResolver(table, cultures or DEFAULT_CULTURES))
        self._builder = builder
        self._resolver = builder.resolver
        self._table = self._resolver.table
        self._cultures = self._resolver.cultures if cultures is None else cultures
        self._default_culture = default_culture
        # fail early on a typo in the default culture
        self._cultures.resolve(None, default_culture)

    @property
    def table(self) -> UnitDefinitionTable:
        return self._table

    @property
    def builder(self) -> PatternBuilder:
        return self._builder

    @property
    def resolver(self) -> AbbreviationResolver:
        return self._resolver

    def _culture(self, culture: "Culture | str | None") -> Culture:
        return self._cultures.resolve(culture, self._default_culture)

    # ------------------------------------------------------------------
    # Stage 1: single unit
    # ------------------------------------------------------------------
    def _match_unit(self, text: str, qtype: QuantityType, unit: Unit, culture: Culture, attempts: _Attempts) -> Optional[Quantity]:
        try:
            pattern = self._builder.unit_pattern(qtype, unit, culture)
        except NoAbbreviationsForUnit:
            # not parseable in this culture
            return None
        attempts.add(unit.name, pattern)
        m = pattern.match(text)
        if m is None:
            return None
        try:
            value = parse_number(m.group("value"), culture.number_format)
        except ValueError:
            # matched the shape but overflows a float ("1e400 m")
            logger.debug("Out-of-range number in %r", text)
            return None
        return Quantity(value, unit, qtype)

    def _parse_single(self, text: str, qtype: QuantityType, culture: Culture, attempts: _Attempts) -> Optional[Quantity]:
        for unit in qtype.units:
            q = self._match_unit(text, qtype, unit, culture, attempts)
            if q is not None:
                return q
        return None

    # ------------------------------------------------------------------
    # Stage 2: composite grammars
    # ------------------------------------------------------------------
    def _parse_grammar(
        self, text: str, qtype: QuantityType, grammar: CompositeGrammar, culture: Culture, attempts: _Attempts
    ) -> Optional[Quantity]:
        try:
            pattern = self._builder.composite_pattern(qtype, grammar, culture)
        except NoAbbreviationsForUnit:
            return None
        attempts.add(grammar.name, pattern)
        m = pattern.match(text)
        if m is None:
            return None

        total: Optional[Quantity] = None
        for i, part in enumerate(grammar.parts):
            piece = m.group(f"part{i}")
            q = self._match_unit(piece, qtype, qtype.unit(part.unit), culture, _Attempts())
            if q is None:
                return None
            total = q if total is None else total + q
        return total

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def attempt(
        self,
        text: Any,
        quantity_type: "QuantityType | str",
        culture: "Culture | str | None" = None,
        grammars: "Tuple[CompositeGrammar, ...] | None" = None,
    ) -> ParseOutcome:
        """Parse ``text`` and report how it went. Never raises on bad text.

        ``grammars`` restricts stage 2 to the given composite grammars;
        ``None`` means every grammar the quantity type registers.
        """
        qtype = self._table.get(quantity_type)
        c = self._culture(culture)
        attempts = _Attempts()

        def fail(reason: str) -> ParseOutcome:
            failure = ParseFailure(text, qtype.name, c.name, tuple(attempts.items), reason)
            logger.debug("%s", failure)
            return ParseOutcome(False, failure=failure)

        if not isinstance(text, str):
            return fail(f"expected str, got {type(text).__name__}")
        s = normalize(text.strip())
        if not s:
            return fail("empty input")

        q = self._parse_single(s, qtype, c, attempts)
        if q is not None:
            return ParseOutcome(True, q, SINGLE, q.unit.name)

        for grammar in qtype.composites if grammars is None else grammars:
            q = self._parse_grammar(s, qtype, grammar, c, attempts)
            if q is not None:
                return ParseOutcome(True, q, COMPOSITE, grammar.name)

        return fail("no pattern matched")

    def try_parse(
        self,
        text: Any,
        quantity_type: "QuantityType | str",
        culture: "Culture | str | None" = None,
    ) -> Tuple[bool, Optional[Quantity]]:
        """Return ``(True, quantity)`` or ``(False, None)``."""
        outcome = self.attempt(text, quantity_type, culture)
        return outcome.success, outcome.quantity

    def parse(
        self,
        text: Any,
        quantity_type: "QuantityType | str",
        culture: "Culture | str | None" = None,
    ) -> Quantity:
        """Parse ``text`` or raise `QuantityFormatError`."""
        outcome = self.attempt(text, quantity_type, culture)
        if not outcome.success:
            raise QuantityFormatError(text, outcome.failure.quantity_type, str(outcome.failure), outcome.failure)
        return outcome.quantity

    def _grammars(self, quantity_type: "QuantityType | str", grammar: "str | None") -> Tuple[CompositeGrammar, ...]:
        qtype = self._table.get(quantity_type)
        if grammar is None:
            qtype.composite()  # raises TypeError when there is none
            return qtype.composites
        return (qtype.composite(grammar),)

    def try_parse_composite(
        self,
        text: Any,
        quantity_type: "QuantityType | str",
        culture: "Culture | str | None" = None,
        grammar: "str | None" = None,
    ) -> Tuple[bool, Optional[Quantity]]:
        """Like `try_parse`, for quantity types with a composite grammar.

        Plain single-unit text ("2 ft") is still accepted. Raises `TypeError`
        if the quantity type registers no composite grammar.
        """
        outcome = self.attempt(text, quantity_type, culture, self._grammars(quantity_type, grammar))
        return outcome.success, outcome.quantity

    def parse_composite(
        self,
        text: Any,
        quantity_type: "QuantityType | str",
        culture: "Culture | str | None" = None,
        grammar: "str | None" = None,
    ) -> Quantity:
        grammars = self._grammars(quantity_type, grammar)
        outcome = self.attempt(text, quantity_type, culture, grammars)
        if not outcome.success:
            expected = "; ".join(g.description or g.name for g in grammars)
            raise QuantityFormatError(
                text,
                outcome.failure.quantity_type,
                f"{outcome.failure}. Expected a format like: {expected}",
                outcome.failure,
            )
        return outcome.quantity

    # ------------------------------------------------------------------
    # Bare abbreviations
    # ------------------------------------------------------------------
    def try_parse_unit(
        self,
        abbreviation: str,
        quantity_type: "QuantityType | str | None" = None,
        culture: "Culture | str | None" = None,
    ) -> Tuple[bool, Optional[Unit]]:
        try:
            return True, self.parse_unit(abbreviation, quantity_type, culture)
        except (QuantityFormatError, AmbiguousUnitError):
            return False, None

    def parse_unit(
        self,
        abbreviation: str,
        quantity_type: "QuantityType | str | None" = None,
        culture: "Culture | str | None" = None,
    ) -> Unit:
        """Resolve a bare abbreviation ("kg") to its unit.

        Within one quantity type the first-declared unit wins. Without a
        quantity type, an abbreviation used by several types raises
        `AmbiguousUnitError`.
        """
        c = self._culture(culture)
        wanted = None if quantity_type is None else self._table.get(quantity_type)
        type_name = "unit" if wanted is None else wanted.name
        if not isinstance(abbreviation, str) or not abbreviation.strip():
            raise QuantityFormatError(abbreviation, type_name, f"Unable to parse {abbreviation!r} as a unit")

        candidates = self._resolver.units_for(abbreviation, c)
        if wanted is not None:
            candidates = frozenset(pair for pair in candidates if pair[0] == wanted.name)
        if not candidates:
            raise QuantityFormatError(abbreviation, type_name, f"No unit abbreviated {abbreviation!r} in {c.name}")

        types = {q for q, _ in candidates}
        if len(types) > 1:
            raise AmbiguousUnitError(abbreviation, candidates)
        qtype = self._table.get(types.pop())
        names = {u for _, u in candidates}
        # declaration order decides between units of the same type
        return next(u for u in qtype.units if u.name in names)


@lru_cache(maxsize=None)
def get_default_parser() -> QuantityParser:
    return QuantityParser()


__all__ = [
    "QuantityParser",
    "ParseOutcome",
    "ParseFailure",
    "get_default_parser",
    "SINGLE",
    "COMPOSITE",
]
