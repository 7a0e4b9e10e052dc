"""
quantlex: culture-aware parsing of physical quantities and a closed algebra
of dimension-checked operators between them.

This module exposes a minimal, stable public API. The shipped unit table,
parser and operator network are created lazily on first access to avoid
import-time side effects and circular imports.
"""

import logging
from importlib import metadata as _metadata
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from quantlex.core.quantity import Quantity

# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("quantlex")
except _metadata.PackageNotFoundError:
    import tomllib

    with open(Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

logging.getLogger(__name__).addHandler(logging.NullHandler())


# Lazy access helpers -------------------------------------------------------

def _default(name: str) -> Any:
    # Import here to avoid import-time side-effects / circular imports.
    if name == "table":
        from quantlex.catalog.registry import DEFAULT_TABLE

        return DEFAULT_TABLE
    if name == "parser":
        from quantlex.parsing.parser import get_default_parser

        return get_default_parser()
    if name == "network":
        from quantlex.core.operators import get_default_network

        return get_default_network()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __getattr__(name: str) -> Any:
    """
    Lazy attribute access for the shared defaults: ``table`` (the frozen unit
    definition table), ``parser`` and ``network``.
    """
    return _default(name)


def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(list(globals().keys()) + ["table", "parser", "network"])


def parse(text: str, quantity_type: str, culture: "str | None" = None) -> "Quantity":
    """Parse ``text`` as ``quantity_type`` with the default parser (raises on failure)."""
    return _default("parser").parse(text, quantity_type, culture)


def try_parse(text: str, quantity_type: str, culture: "str | None" = None) -> "tuple[bool, Quantity | None]":
    return _default("parser").try_parse(text, quantity_type, culture)


def multiply(left: Any, right: Any) -> "Quantity":
    return _default("network").multiply(left, right)


def divide(left: Any, right: Any) -> "Quantity":
    return _default("network").divide(left, right)


# Public names exposed by the package. Keep this minimal and stable.
__all__ = ["__version__", "parse", "try_parse", "multiply", "divide"]
