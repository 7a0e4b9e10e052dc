from __future__ import annotations

from dataclasses import dataclass, field, replace
from math import isfinite
from typing import Iterable, Mapping, Protocol, Tuple, runtime_checkable

# (culture, abbreviations) pairs, in declaration order
Abbreviations = Tuple[Tuple[str, Tuple[str, ...]], ...]


def _freeze_abbreviations(
    abbreviations: "Mapping[str, Iterable[str]] | Abbreviations | None",
) -> Abbreviations:
    if not abbreviations:
        return ()
    items = abbreviations.items() if isinstance(abbreviations, Mapping) else abbreviations
    frozen = []
    for culture, symbols in items:
        if isinstance(symbols, str):
            symbols = (symbols,)
        frozen.append((culture, tuple(symbols)))
    return tuple(frozen)


@runtime_checkable
class PrefixLike(Protocol):
    name: str
    factor: float


@runtime_checkable
class Unit(Protocol):
    name: str
    quantity: str
    prefixes: Tuple[str, ...]
    abbreviations: Abbreviations
    parent: str | None
    prefix: str | None

    # Is this unit linear (purely multiplicative) w.r.t. the base unit?
    @property
    def is_linear(self) -> bool: ...

    def to_base(self, x: float) -> float: ...
    def from_base(self, x: float) -> float: ...

    def abbreviations_in(self, culture: str) -> Tuple[str, ...]: ...


def _prefixed_name(prefix: PrefixLike, name: str) -> str:
    # "Kilo" + "Gram" -> "Kilogram", "Kilo" + "MeterPerHour" -> "KilometerPerHour"
    return prefix.name + name[:1].lower() + name[1:]


@dataclass(frozen=True, slots=True)
class LinearUnit:
    """A unit related to its quantity's base unit by a pure scale factor.

    Attributes
    ----------
    name : str
        Unit name, unique within its quantity type (e.g. "Meter", "Foot").
    quantity : str
        Name of the owning quantity type (e.g. "Length").
    scale : float
        Value of 1 of this unit expressed in the base unit
        (Foot: 0.3048 when the base unit is Meter).
    prefixes : tuple of str
        Names of metric prefixes this unit composes with ("Kilo", "Milli").
    abbreviations : tuple of (culture, tuple of str)
        Per-culture abbreviations in declaration order. The first entry of a
        culture is its default abbreviation.
    parent, prefix : str or None
        Set on synthesized prefixed units: the unit they were derived from and
        the prefix that was applied.
    """

    name: str
    quantity: str
    scale: float
    prefixes: Tuple[str, ...] = ()
    abbreviations: Abbreviations = field(default=())
    parent: str | None = None
    prefix: str | None = None

    def __post_init__(self) -> None:
        if not (self.scale > 0 and isfinite(self.scale)):
            raise ValueError(f"{self.name}: scale must be a positive, finite number")

    @classmethod
    def define(
        cls,
        name: str,
        quantity: str,
        scale: float,
        abbreviations: "Mapping[str, Iterable[str]] | None" = None,
        prefixes: Iterable[str] = (),
    ) -> "LinearUnit":
        """Convenience factory taking abbreviations as a plain mapping."""
        return cls(
            name,
            quantity,
            float(scale),
            prefixes=tuple(prefixes),
            abbreviations=_freeze_abbreviations(abbreviations),
        )

    @property
    def is_linear(self) -> bool:
        return True

    def to_base(self, x: float) -> float:
        return x * self.scale

    def from_base(self, x: float) -> float:
        return x / self.scale

    def abbreviations_in(self, culture: str) -> Tuple[str, ...]:
        for c, symbols in self.abbreviations:
            if c == culture:
                return symbols
        return ()

    def with_prefix(self, prefix: PrefixLike) -> "LinearUnit":
        """Synthesize the prefixed unit (Gram + Kilo -> Kilogram).

        Prefixed units never take further prefixes, and their abbreviations
        are derived from the parent's at lookup time.
        """
        if self.parent is not None:
            raise ValueError(f"Cannot stack prefix {prefix.name!r} on prefixed unit {self.name!r}")
        return replace(
            self,
            name=_prefixed_name(prefix, self.name),
            scale=self.scale * prefix.factor,
            prefixes=(),
            abbreviations=(),
            parent=self.name,
            prefix=prefix.name,
        )


@dataclass(frozen=True, slots=True)
class AffineUnit:
    """A unit with an offset from the base unit: base = x * scale + offset.

    Used for absolute temperature scales such as degrees Celsius.
    """

    name: str
    quantity: str
    scale: float
    offset: float
    abbreviations: Abbreviations = field(default=())
    prefixes: Tuple[str, ...] = ()
    parent: str | None = None
    prefix: str | None = None

    def __post_init__(self) -> None:
        if not (self.scale > 0 and isfinite(self.scale)):
            raise ValueError(f"{self.name}: scale must be a positive, finite number")
        if not isfinite(self.offset):
            raise ValueError(f"{self.name}: offset must be finite")
        if self.prefixes:
            raise ValueError(f"{self.name}: affine units cannot take metric prefixes")

    @classmethod
    def define(
        cls,
        name: str,
        quantity: str,
        scale: float,
        offset: float,
        abbreviations: "Mapping[str, Iterable[str]] | None" = None,
    ) -> "AffineUnit":
        return cls(
            name,
            quantity,
            float(scale),
            float(offset),
            abbreviations=_freeze_abbreviations(abbreviations),
        )

    @property
    def is_linear(self) -> bool:
        return False

    def to_base(self, x: float) -> float:
        return x * self.scale + self.offset

    def from_base(self, x: float) -> float:
        return (x - self.offset) / self.scale

    def abbreviations_in(self, culture: str) -> Tuple[str, ...]:
        for c, symbols in self.abbreviations:
            if c == culture:
                return symbols
        return ()


__all__ = ["Unit", "LinearUnit", "AffineUnit", "PrefixLike", "Abbreviations"]
