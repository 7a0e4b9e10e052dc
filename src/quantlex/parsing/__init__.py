from quantlex.parsing.culture import Culture, CultureCatalog, NumberFormat
from quantlex.parsing.parser import ParseFailure, ParseOutcome, QuantityParser

__all__ = [
    "Culture",
    "CultureCatalog",
    "NumberFormat",
    "QuantityParser",
    "ParseOutcome",
    "ParseFailure",
]
