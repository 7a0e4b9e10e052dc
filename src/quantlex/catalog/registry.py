"""
quantlex.catalog.registry
=========================

The Unit Definition Table: a thread-safe registry of `QuantityType` objects.

Key points
----------
- Encapsulates state in a `UnitDefinitionTable` class (multiple tables can
  coexist, e.g. for tests).
- Data-driven registration: `define()` takes plain unit definitions and
  synthesizes one prefixed unit per declared metric prefix.
- Anti-stacking: synthesized units never take further prefixes.
- Read-only after `freeze()`; the shipped `DEFAULT_TABLE` is frozen at import,
  which is what lets the parser cache patterns for the process lifetime.
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, Iterator, Mapping, Tuple

from quantlex.catalog.prefixes import PREFIXES_BY_NAME, Prefix, get_prefix
from quantlex.core.dimensions import Dimension
from quantlex.core.quantity_type import CompositeGrammar, QuantityType
from quantlex.core.unit import LinearUnit, Unit

logger = logging.getLogger(__name__)


def expand_prefixes(units: Iterable[Unit], prefixes: Mapping[str, Prefix] = PREFIXES_BY_NAME) -> Tuple[Unit, ...]:
    """Return ``units`` with each unit's prefixed variants placed right after it."""
    expanded: list[Unit] = []
    for unit in units:
        expanded.append(unit)
        if not unit.prefixes:
            continue
        if not isinstance(unit, LinearUnit):
            raise ValueError(f"Unit {unit.name!r} is not linear and cannot take prefixes")
        for prefix_name in unit.prefixes:
            expanded.append(unit.with_prefix(get_prefix(prefix_name, prefixes)))
    return tuple(expanded)


class UnitDefinitionTable:
    """Thread-safe registry of quantity types and their units."""

    def __init__(self, prefixes: Mapping[str, Prefix] = PREFIXES_BY_NAME) -> None:
        self._lock = threading.RLock()
        self._types: Dict[str, QuantityType] = {}
        self._prefixes = dict(prefixes)
        self._frozen = False

    def __contains__(self, name: object) -> bool:
        key = name if isinstance(name, str) else getattr(name, "name", None)
        return key in self._types

    def __iter__(self) -> Iterator[QuantityType]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._types)

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def prefixes(self) -> Mapping[str, Prefix]:
        return dict(self._prefixes)

    def freeze(self) -> None:
        """Make the table read-only. Idempotent."""
        with self._lock:
            self._frozen = True

    # -------------------------- public API ---------------------------------
    def register(self, qtype: QuantityType, replace: bool = False) -> None:
        """Register (or overwrite if replace is True) a fully built `QuantityType`."""
        with self._lock:
            if self._frozen:
                raise RuntimeError("Unit definition table is frozen")
            if not replace and qtype.name in self._types:
                raise ValueError(
                    f"Cannot register quantity type '{qtype.name}': "
                    "a quantity type with this name already exists."
                )
            self._types[qtype.name] = qtype
        logger.debug("Registered quantity type %s with %d units", qtype.name, len(qtype.units))

    def define(
        self,
        name: str,
        dim: Dimension,
        base_unit: str,
        units: Iterable[Unit],
        composites: Iterable[CompositeGrammar] = (),
        replace: bool = False,
    ) -> QuantityType:
        """Build a quantity type from unit definitions, synthesizing prefixed units."""
        qtype = QuantityType(
            name,
            dim,
            base_unit,
            expand_prefixes(units, self._prefixes),
            tuple(composites),
        )
        self.register(qtype, replace=replace)
        return qtype

    def get(self, name: "str | QuantityType") -> QuantityType:
        """Lookup a quantity type by name. Raises `ValueError` if unknown."""
        if isinstance(name, QuantityType):
            name = name.name
        with self._lock:
            qtype = self._types.get(name)
        if qtype is None:
            raise ValueError(f"Unknown quantity type: {name}")
        return qtype

    def has(self, name: str) -> bool:
        return name in self._types

    def unit(self, quantity: "str | QuantityType", unit: str) -> Unit:
        return self.get(quantity).unit(unit)

    def all(self) -> Tuple[QuantityType, ...]:
        with self._lock:
            return tuple(self._types.values())


# ---------------------------------------------------------------------------
# Bootstrap the default table from the shipped catalog
# ---------------------------------------------------------------------------

def _bootstrap_default_table() -> UnitDefinitionTable:
    from quantlex.catalog.definitions import QUANTITY_DEFINITIONS

    table = UnitDefinitionTable()
    for definition in QUANTITY_DEFINITIONS:
        table.define(
            definition.name,
            definition.dim,
            definition.base_unit,
            definition.units,
            definition.composites,
        )
    table.freeze()
    return table


# Public, shared default table
DEFAULT_TABLE: UnitDefinitionTable = _bootstrap_default_table()


__all__ = [
    "UnitDefinitionTable",
    "DEFAULT_TABLE",
    "expand_prefixes",
]
