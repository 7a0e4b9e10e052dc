"""
quantlex.core.operators
=======================

The dimensional operator network: a closed, finite table of
``(left type, right type, operator) -> result type`` rules.

Rules are data plus pure functions over base-unit values; there is no
per-type operator overloading. Registering a product ``A × B = C`` also
registers ``B × A = C``, ``C ÷ A = B`` and ``C ÷ B = A``, so every product can
be undone by division. Each registration is checked against the quantity
types' dimension vectors and against previously registered rules.

Zero policy: dividing by a quantity (or scalar) whose value is zero raises
`DivisionByZero`, and a result that overflows to an infinity or NaN raises
`NonFiniteResult`; no rule ever produces an IEEE infinity.
"""

from __future__ import annotations

import logging
import operator
import threading
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from math import isfinite
from typing import TYPE_CHECKING, Callable, Dict, Iterable, Tuple, Union

from quantlex.core.errors import DivisionByZero, IncompatibleQuantitiesError, NonFiniteResult
from quantlex.core.quantity import Quantity
from quantlex.core.quantity_type import QuantityType

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from quantlex.catalog.registry import UnitDefinitionTable

logger = logging.getLogger(__name__)

MUL = "*"
DIV = "/"

_APPLY: Dict[str, Callable[[float, float], float]] = {
    MUL: operator.mul,
    DIV: operator.truediv,
}

Operand = Union[Quantity, timedelta]
TypeRef = Union[QuantityType, str]


@dataclass(frozen=True, slots=True)
class OperatorRule:
    """``left <op> right = result`` over base-unit values."""

    left: str
    right: str
    op: str
    result: QuantityType

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.left, self.right, self.op)

    def apply(self, left_base: float, right_base: float) -> float:
        return _APPLY[self.op](left_base, right_base)

    def __str__(self) -> str:
        sym = "×" if self.op == MUL else "÷"
        return f"{self.left} {sym} {self.right} = {self.result.name}"


class OperatorNetwork:
    """Thread-safe registry of cross-type multiply/divide rules.

    Parameters
    ----------
    table : UnitDefinitionTable, optional
        Used to resolve quantity types given by name and to convert
        `datetime.timedelta` operands into Duration quantities.
    duration_type : str
        Name of the quantity type `timedelta` operands are converted to.
    """

    def __init__(self, table: "UnitDefinitionTable | None" = None, duration_type: str = "Duration") -> None:
        self._lock = threading.RLock()
        self._rules: Dict[Tuple[str, str, str], OperatorRule] = {}
        self._products: list[Tuple[str, str, str]] = []
        self._table = table
        self._duration_type = duration_type

    def __contains__(self, key: Tuple[str, str, str]) -> bool:
        return key in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    # -------------------------- registration -------------------------------
    def _resolve(self, qtype: TypeRef) -> QuantityType:
        if isinstance(qtype, QuantityType):
            return qtype
        if self._table is None:
            raise ValueError(f"Cannot resolve quantity type {qtype!r} without a table")
        return self._table.get(qtype)

    def _add(self, left: QuantityType, right: QuantityType, op: str, result: QuantityType) -> None:
        key = (left.name, right.name, op)
        existing = self._rules.get(key)
        if existing is not None:
            if existing.result.name != result.name:
                raise ValueError(
                    f"Contradictory rule {left.name} {op} {right.name}: "
                    f"already yields {existing.result.name}, not {result.name}"
                )
            return
        self._rules[key] = OperatorRule(left.name, right.name, op, result)

    def define_product(self, left: TypeRef, right: TypeRef, result: TypeRef) -> None:
        """Register ``left × right = result`` and the rules it implies."""
        a, b, c = self._resolve(left), self._resolve(right), self._resolve(result)
        if a.dim * b.dim != c.dim:
            raise ValueError(
                f"{a.name} × {b.name} has dimension {a.dim * b.dim}, "
                f"but {c.name} is {c.dim}"
            )
        with self._lock:
            # Validate all four before inserting any, so a conflict leaves no partial state.
            implied = ((a, b, MUL, c), (b, a, MUL, c), (c, a, DIV, b), (c, b, DIV, a))
            for l, r, op, res in implied:
                existing = self._rules.get((l.name, r.name, op))
                if existing is not None and existing.result.name != res.name:
                    raise ValueError(
                        f"Contradictory rule {l.name} {op} {r.name}: "
                        f"already yields {existing.result.name}, not {res.name}"
                    )
            for l, r, op, res in implied:
                self._add(l, r, op, res)
            if (a.name, b.name, c.name) not in self._products:
                self._products.append((a.name, b.name, c.name))
        logger.debug("Registered %s × %s = %s", a.name, b.name, c.name)

    def define_quotient(self, left: TypeRef, right: TypeRef, result: TypeRef) -> None:
        """Register ``left ÷ right = result`` (as the product ``result × right = left``)."""
        a, b, c = self._resolve(left), self._resolve(right), self._resolve(result)
        if a.dim / b.dim != c.dim:
            raise ValueError(
                f"{a.name} ÷ {b.name} has dimension {a.dim / b.dim}, "
                f"but {c.name} is {c.dim}"
            )
        self.define_product(c, b, a)

    # ----------------------------- lookup ----------------------------------
    def rules(self) -> Tuple[OperatorRule, ...]:
        with self._lock:
            return tuple(self._rules.values())

    def products(self) -> Tuple[Tuple[str, str, str], ...]:
        """Declared ``(A, B, C)`` triples for ``A × B = C``."""
        with self._lock:
            return tuple(self._products)

    def has_rule(self, left: TypeRef, right: TypeRef, op: str) -> bool:
        return (_name(left), _name(right), op) in self._rules

    def rule(self, left: TypeRef, right: TypeRef, op: str) -> OperatorRule:
        try:
            return self._rules[(_name(left), _name(right), op)]
        except KeyError:
            sym = "×" if op == MUL else "÷"
            raise IncompatibleQuantitiesError(
                f"No rule for {_name(left)} {sym} {_name(right)}"
            ) from None

    def check_closure(self) -> None:
        """Raise `ValueError` if any product lacks one of its inverse rules."""
        with self._lock:
            for a, b, c in self._products:
                for key, expected in (
                    ((a, b, MUL), c),
                    ((b, a, MUL), c),
                    ((c, a, DIV), b),
                    ((c, b, DIV), a),
                ):
                    found = self._rules.get(key)
                    if found is None or found.result.name != expected:
                        raise ValueError(f"Rule set is not closed: missing {key} -> {expected}")

    # ---------------------------- evaluation -------------------------------
    def _coerce(self, operand: Operand) -> Quantity:
        if isinstance(operand, Quantity):
            return operand
        if isinstance(operand, timedelta):
            if self._table is None:
                raise TypeError("timedelta operands need a network bound to a table")
            duration = self._table.get(self._duration_type)
            return duration.quantity(operand.total_seconds(), duration.base_unit)
        raise TypeError(f"Unsupported operand type: {type(operand).__name__}")

    def _evaluate(self, left: Operand, right: Operand, op: str) -> Quantity:
        a, b = self._coerce(left), self._coerce(right)
        rule = self.rule(a.quantity_type, b.quantity_type, op)
        rb = b.base_value
        if op == DIV and rb == 0.0:
            raise DivisionByZero(f"Cannot divide {a.quantity_type.name} by zero {b.quantity_type.name}")
        value = rule.apply(a.base_value, rb)
        if not isfinite(value):
            raise NonFiniteResult(
                f"{a.quantity_type.name} {op} {b.quantity_type.name} is out of range"
            )
        return rule.result.from_base(value)

    def multiply(self, left: Operand, right: Operand) -> Quantity:
        return self._evaluate(left, right, MUL)

    def divide(self, left: Operand, right: Operand) -> Quantity:
        return self._evaluate(left, right, DIV)


def _name(qtype: TypeRef) -> str:
    return qtype if isinstance(qtype, str) else qtype.name


# ---------------------------------------------------------------------------
# Default network over the shipped catalog
# ---------------------------------------------------------------------------

# (A, B, C) for A × B = C; inverses are derived on registration.
DEFAULT_PRODUCTS: Tuple[Tuple[str, str, str], ...] = (
    ("Length", "Length", "Area"),
    ("Area", "Length", "Volume"),
    ("Speed", "Duration", "Length"),
    ("Acceleration", "Duration", "Speed"),
    ("Mass", "Acceleration", "Force"),
    ("Force", "Length", "Torque"),
    ("Length", "Speed", "KinematicViscosity"),
    ("Length", "SpecificWeight", "Pressure"),
    ("Pressure", "Area", "Force"),
)


def build_network(table: "UnitDefinitionTable", products: Iterable[Tuple[str, str, str]] = DEFAULT_PRODUCTS) -> OperatorNetwork:
    network = OperatorNetwork(table)
    for a, b, c in products:
        network.define_product(a, b, c)
    network.check_closure()
    return network


@lru_cache(maxsize=None)
def get_default_network() -> OperatorNetwork:
    # Import here to avoid import-time side-effects / circular imports.
    from quantlex.catalog.registry import DEFAULT_TABLE

    return build_network(DEFAULT_TABLE)


__all__ = [
    "OperatorRule",
    "OperatorNetwork",
    "MUL",
    "DIV",
    "DEFAULT_PRODUCTS",
    "build_network",
    "get_default_network",
]
