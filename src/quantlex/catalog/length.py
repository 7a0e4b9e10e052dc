"""
quantlex.catalog.length
=======================

Feet and inches, the composite format most people write lengths in.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import floor

from quantlex.catalog.registry import DEFAULT_TABLE
from quantlex.core.quantity import Quantity

INCHES_PER_FOOT = 12


@dataclass(frozen=True, slots=True)
class FeetInches:
    """A length split into whole feet and the remaining inches.

    ``feet`` is ``floor(total_inches / 12)`` and ``inches`` is always in
    ``[0, 12)``, so -20 in is ``FeetInches(-2, 4.0)``.
    """

    feet: float
    inches: float

    def to_string(self, culture=None) -> str:
        """``"2 ft 4 in"``, with inches rounded to a whole number."""
        from quantlex.parsing.abbreviations import get_default_resolver
        from quantlex.parsing.culture import DEFAULT_CULTURES, format_number

        c = DEFAULT_CULTURES.resolve(culture)
        resolver = get_default_resolver()
        fmt = c.number_format
        feet = format_number(self.feet, fmt, 0)
        inches = format_number(round(self.inches), fmt, 0)
        return (
            f"{feet} {resolver.default_abbreviation('Length', 'Foot', c)} "
            f"{inches} {resolver.default_abbreviation('Length', 'Inch', c)}"
        )

    def __str__(self) -> str:
        return self.to_string()


def to_feet_inches(length: Quantity) -> FeetInches:
    """Split a Length into whole feet and remaining inches."""
    if length.quantity_type.name != "Length":
        raise TypeError(f"Expected a Length, got {length.quantity_type.name}")
    total = length.value_in("Inch")
    feet = floor(total / INCHES_PER_FOOT)
    return FeetInches(float(feet), total - feet * INCHES_PER_FOOT)


def from_feet_inches(feet: float, inches: float) -> Quantity:
    """Build a Length (in inches) from a feet and inches pair."""
    length = DEFAULT_TABLE.get("Length")
    return length.quantity(INCHES_PER_FOOT * feet + inches, "Inch")


__all__ = ["FeetInches", "to_feet_inches", "from_feet_inches", "INCHES_PER_FOOT"]
