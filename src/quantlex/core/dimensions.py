"""
quantlex.core.dimensions
========================

Dimension vectors: integer exponents over the seven SI base dimensions
(L, M, T, I, Θ, N, J). Every quantity type carries one, and the operator
network multiplies and divides them to check each rule it registers.
"""

from __future__ import annotations

from typing import Iterable

BASES = ("L", "M", "T", "I", "Θ", "N", "J")

# (index into BASES, SI symbol), mass first as in "kg·m/s²"
_SI_ORDER = ((1, "kg"), (0, "m"), (2, "s"), (3, "A"), (4, "K"), (5, "mol"), (6, "cd"))
_SUPERSCRIPTS = str.maketrans("0123456789", "⁰¹²³⁴⁵⁶⁷⁸⁹")


class Dimension(tuple):
    """Seven integer exponents, one per entry of `BASES`. Hashable."""

    __slots__ = ()

    def __new__(cls, exponents: Iterable[int]) -> "Dimension":
        t = tuple(exponents)
        if len(t) != len(BASES):
            raise ValueError(f"A dimension has {len(BASES)} exponents, got {len(t)}")
        if any(not isinstance(e, int) or isinstance(e, bool) for e in t):
            raise TypeError(f"Dimension exponents must be integers: {t!r}")
        return super().__new__(cls, t)

    @classmethod
    def of(cls, **exponents: int) -> "Dimension":
        """``Dimension.of(L=1, T=-1)``; bases not named are zero."""
        unknown = set(exponents) - set(BASES)
        if unknown:
            raise ValueError(f"Unknown base dimension(s): {sorted(unknown)}")
        return cls(exponents.get(b, 0) for b in BASES)

    def __mul__(self, other: "Dimension") -> "Dimension":  # type: ignore[override]
        if not isinstance(other, Dimension):
            return NotImplemented
        return Dimension(x + y for x, y in zip(self, other))

    def __truediv__(self, other: "Dimension") -> "Dimension":
        if not isinstance(other, Dimension):
            return NotImplemented
        return Dimension(x - y for x, y in zip(self, other))

    def __pow__(self, n: int) -> "Dimension":
        if not isinstance(n, int):
            raise TypeError(f"Exponent must be int, got {type(n).__name__}")
        return Dimension(e * n for e in self)

    def __repr__(self) -> str:
        named = ", ".join(f"{b}={e}" for b, e in zip(BASES, self) if e)
        return f"Dimension.of({named})"

    def __str__(self) -> str:
        """SI form used in error messages: ``kg·m/s²``, or ``1`` if dimensionless."""
        num, den = [], []
        for i, symbol in _SI_ORDER:
            e = self[i]
            power = "" if abs(e) == 1 else str(abs(e)).translate(_SUPERSCRIPTS)
            if e > 0:
                num.append(symbol + power)
            elif e < 0:
                den.append(symbol + power)
        text = "·".join(num) or "1"
        return f"{text}/{'·'.join(den)}" if den else text


LENGTH = Dimension.of(L=1)
MASS = Dimension.of(M=1)
TIME = Dimension.of(T=1)
TEMPERATURE = Dimension((0, 0, 0, 0, 1, 0, 0))

AREA = LENGTH ** 2
VOLUME = LENGTH ** 3
SPEED = LENGTH / TIME
ACCELERATION = SPEED / TIME
FORCE = MASS * ACCELERATION
TORQUE = FORCE * LENGTH
PRESSURE = FORCE / AREA
SPECIFIC_WEIGHT = FORCE / VOLUME
KINEMATIC_VISCOSITY = AREA / TIME
