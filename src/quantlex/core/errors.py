"""
quantlex.core.errors
====================

Exception hierarchy shared by the parser, the abbreviation resolver and the
operator network.

Every error derives from `QuantlexError` *and* from the builtin exception a
caller would naturally catch (`ValueError`, `LookupError`, `TypeError`,
`ZeroDivisionError`), so existing ``except ValueError`` blocks keep working.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from quantlex.parsing.parser import ParseFailure


class QuantlexError(Exception):
    """Base class for all quantlex errors."""


class AbbreviationNotFound(QuantlexError, LookupError):
    """No abbreviation is defined for a unit in the culture or its fallback."""

    def __init__(self, quantity_type: str, unit: str, culture: str) -> None:
        self.quantity_type = quantity_type
        self.unit = unit
        self.culture = culture
        super().__init__(
            f"No abbreviation defined for {quantity_type}.{unit} "
            f"in culture {culture!r} or the default culture"
        )


class NoAbbreviationsForUnit(AbbreviationNotFound):
    """Raised at pattern-build time; the unit cannot be parsed in that culture."""


class UnknownCultureError(QuantlexError, LookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown culture: {name!r}")


class QuantityFormatError(QuantlexError, ValueError):
    """Text could not be parsed into a quantity (raising counterpart of `try_parse`)."""

    def __init__(
        self,
        text: Any,
        quantity_type: str,
        message: str | None = None,
        failure: "ParseFailure | None" = None,
    ) -> None:
        self.text = text
        self.quantity_type = quantity_type
        self.failure = failure
        if message is None:
            message = f"Unable to parse {text!r} as {quantity_type}"
        super().__init__(message)


class AmbiguousUnitError(QuantlexError, ValueError):
    def __init__(self, abbreviation: str, candidates: "frozenset[tuple[str, str]]") -> None:
        self.abbreviation = abbreviation
        self.candidates = candidates
        names = ", ".join(f"{q}.{u}" for q, u in sorted(candidates))
        super().__init__(f"Abbreviation {abbreviation!r} is ambiguous: {names}")


class IncompatibleQuantitiesError(QuantlexError, TypeError):
    """Operands whose quantity types have no rule (or must match and do not)."""


class DivisionByZero(QuantlexError, ZeroDivisionError):
    """Division by a quantity or scalar whose value is zero."""


class NonFiniteResult(QuantlexError, OverflowError):
    """A rule produced an infinity or NaN (the operands were too large)."""


__all__ = [
    "QuantlexError",
    "AbbreviationNotFound",
    "NoAbbreviationsForUnit",
    "UnknownCultureError",
    "QuantityFormatError",
    "AmbiguousUnitError",
    "IncompatibleQuantitiesError",
    "DivisionByZero",
    "NonFiniteResult",
]
