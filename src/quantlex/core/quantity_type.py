"""
quantlex.core.quantity_type
===========================

`QuantityType` describes one physical dimension family (Length, Mass, ...):
its dimension vector, its single base unit, the ordered list of units that
convert to and from that base unit, and any composite textual grammars
(e.g. feet + inches) registered for it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Tuple

from quantlex.core.dimensions import Dimension
from quantlex.core.unit import Unit

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from quantlex.core.quantity import Quantity


@dataclass(frozen=True, slots=True)
class CompositePart:
    """One component of a composite grammar.

    ``separator`` is a regex fragment placed *after* this part; it is ignored
    for the last part.
    """

    unit: str
    separator: str = r"\s?"


@dataclass(frozen=True, slots=True)
class CompositeGrammar:
    """An ordered multi-unit textual format such as ``2 ft 4 in``."""

    name: str
    parts: Tuple[CompositePart, ...]
    description: str = ""

    def __post_init__(self) -> None:
        if len(self.parts) < 2:
            raise ValueError(f"Composite grammar {self.name!r} needs at least two parts")

    @property
    def units(self) -> Tuple[str, ...]:
        return tuple(p.unit for p in self.parts)


@dataclass(frozen=True, slots=True)
class QuantityType:
    """A physical dimension family with exactly one base unit."""

    name: str
    dim: Dimension
    base_unit: str
    units: Tuple[Unit, ...]
    composites: Tuple[CompositeGrammar, ...] = field(default=())

    def __post_init__(self) -> None:
        names = [u.name for u in self.units]
        if len(set(names)) != len(names):
            dupes = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"{self.name}: duplicate unit names {dupes}")
        if self.base_unit not in names:
            raise ValueError(f"{self.name}: base unit {self.base_unit!r} is not one of its units")
        for u in self.units:
            if u.quantity != self.name:
                raise ValueError(
                    f"Unit {u.name!r} belongs to {u.quantity!r}, not {self.name!r}"
                )
        for grammar in self.composites:
            for part in grammar.parts:
                if part.unit not in names:
                    raise ValueError(
                        f"{self.name}: composite {grammar.name!r} references unknown unit {part.unit!r}"
                    )

    def __iter__(self) -> Iterator[Unit]:
        return iter(self.units)

    def __contains__(self, unit: object) -> bool:
        name = unit if isinstance(unit, str) else getattr(unit, "name", None)
        return any(u.name == name for u in self.units)

    def __repr__(self) -> str:
        return f"QuantityType({self.name!r}, base={self.base_unit!r}, units={len(self.units)})"

    @property
    def base(self) -> Unit:
        return self.unit(self.base_unit)

    def unit(self, unit: "Unit | str") -> Unit:
        """Return this type's unit by name (or validate a unit object)."""
        name = unit if isinstance(unit, str) else unit.name
        for u in self.units:
            if u.name == name:
                return u
        raise ValueError(f"Unknown {self.name} unit: {name!r}")

    def composite(self, name: str | None = None) -> CompositeGrammar:
        if not self.composites:
            raise TypeError(f"{self.name} has no composite grammar")
        if name is None:
            return self.composites[0]
        for grammar in self.composites:
            if grammar.name == name:
                return grammar
        raise ValueError(f"{self.name} has no composite grammar named {name!r}")

    # --- construction helpers ---
    def quantity(self, value: float, unit: "Unit | str | None" = None) -> "Quantity":
        from quantlex.core.quantity import Quantity

        u = self.base if unit is None else self.unit(unit)
        return Quantity(value, u, self)

    def from_base(self, base_value: float) -> "Quantity":
        """Wrap a base-unit magnitude as a quantity of this type."""
        return self.quantity(base_value)

    @property
    def zero(self) -> "Quantity":
        return self.quantity(0.0)


__all__ = ["QuantityType", "CompositeGrammar", "CompositePart"]
