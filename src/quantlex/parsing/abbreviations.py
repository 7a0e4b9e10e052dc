"""
quantlex.parsing.abbreviations
==============================

The Abbreviation Resolver: turns a (quantity type, unit, culture) triple into
every string that denotes the unit, and a string back into the units it may
denote.

Key points
----------
- Prefixed units carry no abbreviations of their own. Their strings are the
  product of the prefix symbols and the parent unit's abbreviations
  ("k" + "g" -> "kg"). Prefix symbols are taken from the same culture as the
  parent abbreviations, so ru-RU gets "км" rather than "kм".
- If the unit declares nothing for the requested culture the default culture
  (en-US) is used instead; if that is empty too, `AbbreviationNotFound`.
- Every string is NFC-normalized, both when stored and when looked up.
- Results are cached per (quantity type, unit, culture). Values are computed
  outside the lock and inserted with ``setdefault``, so racing threads all
  end up holding the same tuple.
"""

from __future__ import annotations

import logging
import threading
import unicodedata
from functools import lru_cache
from typing import Dict, FrozenSet, Mapping, Optional, Set, Tuple

from quantlex.catalog.prefixes import Prefix
from quantlex.catalog.registry import DEFAULT_TABLE, UnitDefinitionTable
from quantlex.core.errors import AbbreviationNotFound
from quantlex.core.quantity_type import QuantityType
from quantlex.core.unit import Unit
from quantlex.parsing.culture import DEFAULT_CULTURE_NAME, DEFAULT_CULTURES, Culture, CultureCatalog

logger = logging.getLogger(__name__)


def normalize(text: str) -> str:
    return unicodedata.normalize("NFC", text)


def _unique(items) -> Tuple[str, ...]:
    seen: Dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return tuple(seen)


class AbbreviationResolver:
    """Resolve unit abbreviations for a `UnitDefinitionTable`.

    Parameters
    ----------
    table : UnitDefinitionTable, optional
        Defaults to the shipped, frozen ``DEFAULT_TABLE``.
    cultures : CultureCatalog
        Used to validate culture names and pick the default culture.
    prefixes : mapping of str to Prefix
        Where prefixed units look up their prefix symbols.
    fallback_culture : str
        The culture consulted when a unit declares nothing for the requested one.
    """

    def __init__(
        self,
        table: Optional[UnitDefinitionTable] = None,
        cultures: CultureCatalog = DEFAULT_CULTURES,
        prefixes: Optional[Mapping[str, Prefix]] = None,
        fallback_culture: str = DEFAULT_CULTURE_NAME,
    ) -> None:
        self._table = DEFAULT_TABLE if table is None else table
        self._cultures = cultures
        self._prefixes = dict(self._table.prefixes if prefixes is None else prefixes)
        self._fallback = fallback_culture
        self._lock = threading.RLock()
        self._cache: Dict[Tuple[str, str, str], Tuple[str, ...]] = {}
        self._reverse: Dict[str, Mapping[str, FrozenSet[Tuple[str, str]]]] = {}

    @property
    def table(self) -> UnitDefinitionTable:
        return self._table

    @property
    def cultures(self) -> CultureCatalog:
        return self._cultures

    # ------------------------------------------------------------------
    def _culture_name(self, culture: "Culture | str | None") -> str:
        return self._cultures.resolve(culture).name

    def _lookup(self, quantity_type: "QuantityType | str", unit: "Unit | str") -> Tuple[QuantityType, Unit]:
        qtype = self._table.get(quantity_type)
        return qtype, qtype.unit(unit)

    def _declared(self, qtype: QuantityType, unit: Unit, culture: str) -> Tuple[str, ...]:
        """Abbreviations in declaration order, after prefix expansion and fallback."""
        if unit.parent is None:
            owner, prefix = unit, None
        else:
            owner, prefix = qtype.unit(unit.parent), self._prefixes[unit.prefix]

        effective = culture
        symbols = owner.abbreviations_in(culture)
        if not symbols and culture != self._fallback:
            logger.debug(
                "No %s abbreviation for %s.%s; falling back to %s",
                culture, qtype.name, unit.name, self._fallback,
            )
            effective = self._fallback
            symbols = owner.abbreviations_in(self._fallback)
        if not symbols:
            raise AbbreviationNotFound(qtype.name, unit.name, culture)

        if prefix is not None:
            symbols = tuple(p + s for s in symbols for p in prefix.symbols_in(effective))
        return _unique(normalize(s) for s in symbols)

    def declared_abbreviations(
        self,
        quantity_type: "QuantityType | str",
        unit: "Unit | str",
        culture: "Culture | str | None" = None,
    ) -> Tuple[str, ...]:
        """All abbreviations of ``unit`` in declaration order (default first)."""
        qtype, u = self._lookup(quantity_type, unit)
        name = self._culture_name(culture)
        key = (qtype.name, u.name, name)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        computed = self._declared(qtype, u, name)
        with self._lock:
            return self._cache.setdefault(key, computed)

    def abbreviations_for(
        self,
        quantity_type: "QuantityType | str",
        unit: "Unit | str",
        culture: "Culture | str | None" = None,
    ) -> Tuple[str, ...]:
        """Abbreviations of ``unit``, longest first (ties keep declaration order).

        Raises `AbbreviationNotFound` when neither ``culture`` nor the fallback
        culture declares any.
        """
        declared = self.declared_abbreviations(quantity_type, unit, culture)
        return tuple(sorted(declared, key=len, reverse=True))

    def default_abbreviation(
        self,
        quantity_type: "QuantityType | str",
        unit: "Unit | str",
        culture: "Culture | str | None" = None,
    ) -> str:
        return self.declared_abbreviations(quantity_type, unit, culture)[0]

    # --------------------------- reverse lookup ----------------------------
    def _build_reverse(self, culture: str) -> Mapping[str, FrozenSet[Tuple[str, str]]]:
        index: Dict[str, Set[Tuple[str, str]]] = {}
        for qtype in self._table:
            for unit in qtype:
                try:
                    symbols = self.declared_abbreviations(qtype, unit, culture)
                except AbbreviationNotFound:
                    continue
                for symbol in symbols:
                    index.setdefault(symbol, set()).add((qtype.name, unit.name))
        logger.debug("Built reverse abbreviation index for %s (%d strings)", culture, len(index))
        return {symbol: frozenset(units) for symbol, units in index.items()}

    def units_for(self, text: str, culture: "Culture | str | None" = None) -> FrozenSet[Tuple[str, str]]:
        """Every ``(quantity type, unit)`` pair ``text`` abbreviates in ``culture``."""
        name = self._culture_name(culture)
        index = self._reverse.get(name)
        if index is None:
            computed = self._build_reverse(name)
            with self._lock:
                index = self._reverse.setdefault(name, computed)
        return index.get(normalize(text.strip()), frozenset())


@lru_cache(maxsize=None)
def get_default_resolver() -> AbbreviationResolver:
    return AbbreviationResolver()


__all__ = [
    "AbbreviationResolver",
    "get_default_resolver",
    "normalize",
]
