"""The shipped unit catalog: prefixes, unit definitions and the default table."""

from quantlex.catalog.length import FeetInches, from_feet_inches, to_feet_inches
from quantlex.catalog.registry import DEFAULT_TABLE, UnitDefinitionTable

__all__ = [
    "DEFAULT_TABLE",
    "UnitDefinitionTable",
    "FeetInches",
    "to_feet_inches",
    "from_feet_inches",
]
