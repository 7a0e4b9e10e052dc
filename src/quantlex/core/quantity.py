"""
quantlex.core.quantity
======================

Defines the immutable `Quantity` value: a magnitude expressed in one of the
units of a `QuantityType`.

This module provides:
- Conversion between units of the same quantity type via the base unit.
- Same-type addition and subtraction (results in the left operand's unit).
- Scalar scaling, tolerant comparisons and a discretized hashing key.
- Cross-type multiplication and division, dispatched through the default
  `OperatorNetwork` (see `quantlex.core.operators`).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from math import isclose
from typing import TYPE_CHECKING, Union

from quantlex.core.dimensions import Dimension
from quantlex.core.errors import AbbreviationNotFound, DivisionByZero, IncompatibleQuantitiesError
from quantlex.core.unit import Unit

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from quantlex.core.quantity_type import QuantityType
    from quantlex.parsing.culture import Culture

Number = Union[int, float]

_REL_TOL = 1e-12


@dataclass(frozen=True, slots=True, eq=False)
class Quantity:
    """
    A physical quantity: ``value`` expressed in ``unit`` of ``quantity_type``.

    Attributes
    ----------
    value : float
        Magnitude in ``unit``.
    unit : Unit
        One of ``quantity_type.units``.
    quantity_type : QuantityType
        The dimension family, used as the runtime type tag for operator
        dispatch.
    """

    value: float
    unit: Unit
    quantity_type: "QuantityType"

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))
        if self.unit.quantity != self.quantity_type.name or self.unit not in self.quantity_type:
            raise ValueError(
                f"Unit {self.unit.name!r} is not a {self.quantity_type.name} unit"
            )

    # --- views -------------------------------------------------------------
    @property
    def base_value(self) -> float:
        """Magnitude expressed in the quantity type's base unit."""
        return self.unit.to_base(self.value)

    @property
    def dim(self) -> Dimension:
        return self.quantity_type.dim

    def value_in(self, unit: "Unit | str") -> float:
        target = self.quantity_type.unit(unit)
        if target.name == self.unit.name:
            return self.value
        return target.from_base(self.base_value)

    def to(self, unit: "Unit | str") -> "Quantity":
        target = self.quantity_type.unit(unit)
        if target.name == self.unit.name:
            return self
        return Quantity(target.from_base(self.base_value), target, self.quantity_type)

    def to_base(self) -> "Quantity":
        return self.to(self.quantity_type.base_unit)

    # --- comparisons ---------------------------------------------------------
    def _same_type(self, other: object, op: str) -> "Quantity":
        if not isinstance(other, Quantity):
            raise TypeError(f"Cannot {op} Quantity and {type(other).__name__}")
        if other.quantity_type.name != self.quantity_type.name:
            raise IncompatibleQuantitiesError(
                f"Cannot {op} {self.quantity_type.name} and {other.quantity_type.name}"
            )
        return other

    def _is_close(self, other_base: float) -> bool:
        return isclose(self.base_value, other_base, rel_tol=_REL_TOL, abs_tol=0.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return (
            self.quantity_type.name == other.quantity_type.name
            and self._is_close(other.base_value)
        )

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return not self.__eq__(other)

    def __lt__(self, other: object) -> bool:
        o = self._same_type(other, "compare")
        return self.base_value < o.base_value and not self._is_close(o.base_value)

    def __le__(self, other: object) -> bool:
        o = self._same_type(other, "compare")
        return self.base_value < o.base_value or self._is_close(o.base_value)

    def __gt__(self, other: object) -> bool:
        o = self._same_type(other, "compare")
        return self.base_value > o.base_value and not self._is_close(o.base_value)

    def __ge__(self, other: object) -> bool:
        o = self._same_type(other, "compare")
        return self.base_value > o.base_value or self._is_close(o.base_value)

    __hash__ = None  # type: ignore[assignment]

    def as_key(self, precision: int = 12) -> tuple:
        """
        Return a hashable, discretized key for this quantity.

        `__hash__` is disabled because `__eq__` is tolerant (``isclose``),
        which would break the hash contract. Use this key for dicts and sets.

        >>> a = Length.quantity(1.0 + 1e-13)
        >>> b = Length.quantity(1.0 - 1e-13)
        >>> a == b, a.as_key(9) == b.as_key(9)
        (True, True)
        """
        rounded = round(self.base_value, precision)
        # -0.0 and 0.0 must produce the same key
        if rounded == 0.0:
            rounded = 0.0
        return (self.quantity_type.name, rounded)

    # --- same-type arithmetic ------------------------------------------------
    def __add__(self, other: "Quantity") -> "Quantity":
        if not isinstance(other, Quantity):
            return NotImplemented
        self._same_type(other, "add")
        total = self.base_value + other.base_value
        return Quantity(self.unit.from_base(total), self.unit, self.quantity_type)

    def __sub__(self, other: "Quantity") -> "Quantity":
        if not isinstance(other, Quantity):
            return NotImplemented
        self._same_type(other, "subtract")
        diff = self.base_value - other.base_value
        return Quantity(self.unit.from_base(diff), self.unit, self.quantity_type)

    def __neg__(self) -> "Quantity":
        return Quantity(-self.value, self.unit, self.quantity_type)

    def __pos__(self) -> "Quantity":
        return self

    def __abs__(self) -> "Quantity":
        return Quantity(abs(self.value), self.unit, self.quantity_type)

    # --- scalar and cross-type arithmetic ----------------------------------
    def __mul__(self, other: "Quantity | timedelta | Number") -> "Quantity":
        if isinstance(other, (int, float)):
            return Quantity(self.value * float(other), self.unit, self.quantity_type)
        if isinstance(other, (Quantity, timedelta)):
            from quantlex.core.operators import get_default_network

            return get_default_network().multiply(self, other)
        return NotImplemented

    def __rmul__(self, other: "timedelta | Number") -> "Quantity":
        if isinstance(other, (int, float)):
            return self.__mul__(other)
        if isinstance(other, timedelta):
            from quantlex.core.operators import get_default_network

            return get_default_network().multiply(other, self)
        return NotImplemented

    def __truediv__(self, other: "Quantity | timedelta | Number") -> "Quantity":
        if isinstance(other, (int, float)):
            if other == 0:
                raise DivisionByZero(f"Cannot divide {self.quantity_type.name} by zero")
            return Quantity(self.value / float(other), self.unit, self.quantity_type)
        if isinstance(other, (Quantity, timedelta)):
            from quantlex.core.operators import get_default_network

            return get_default_network().divide(self, other)
        return NotImplemented

    def __rtruediv__(self, other: "timedelta") -> "Quantity":
        if isinstance(other, timedelta):
            from quantlex.core.operators import get_default_network

            return get_default_network().divide(other, self)
        return NotImplemented

    # --- rendering ---------------------------------------------------------
    def _abbreviation(self) -> str:
        from quantlex.parsing.abbreviations import get_default_resolver

        resolver = get_default_resolver()
        name = self.quantity_type.name
        # quantities built on a private table are shown by unit name
        if not resolver.table.has(name) or resolver.table.get(name) is not self.quantity_type:
            return self.unit.name
        try:
            return resolver.default_abbreviation(self.quantity_type, self.unit)
        except AbbreviationNotFound:
            return self.unit.name

    def __repr__(self) -> str:
        return f"{self.value:.15g} {self._abbreviation()}"

    def __format__(self, spec: str) -> str:
        """
        Format as text.

        Supported specifiers
        --------------------
        "" (empty), or "native"
            The quantity in its current unit (default).
        "base"
            The quantity converted to its type's base unit.
        """
        spec = (spec or "").strip().lower()
        if spec in ("", "native"):
            return repr(self)
        if spec == "base":
            return repr(self.to_base())
        raise ValueError("Unknown format spec; use '', 'native', or 'base'")

    def to_string(self, culture: "Culture | str | None" = None, unit: "Unit | str | None" = None) -> str:
        """Culture-aware text that `QuantityParser.parse` reads back exactly."""
        from quantlex.parsing.formatter import get_default_formatter

        return get_default_formatter().format(self, culture, unit)


__all__ = ["Quantity", "Number"]
