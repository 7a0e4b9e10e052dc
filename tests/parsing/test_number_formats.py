import pytest

from quantlex.core.errors import UnknownCultureError
from quantlex.parsing.culture import (
    DEFAULT_CULTURES,
    Culture,
    CultureCatalog,
    NumberFormat,
    format_number,
    parse_number,
)

EN = NumberFormat(".", ",", "-")
DE = NumberFormat(",", ".", "-")
NB = DEFAULT_CULTURES.get("nb-NO").number_format


# -------------------------------
# NumberFormat validation
# -------------------------------

def test_separators_must_differ():
    with pytest.raises(ValueError):
        NumberFormat(",", ",")

def test_empty_group_separator_means_none():
    assert NumberFormat(".", "").group_separator is None

@pytest.mark.parametrize("kwargs", [
    {"decimal_separator": ""},
    {"negative_sign": ""},
    {"decimal_separator": "1"},
])
def test_invalid_number_formats(kwargs):
    with pytest.raises(ValueError):
        NumberFormat(**kwargs)


# -------------------------------
# Parsing numbers
# -------------------------------

@pytest.mark.parametrize("fmt, text, expected", [
    (EN, "1234.5", 1234.5),
    (EN, "1,234.5", 1234.5),
    (EN, "-0.25", -0.25),
    (EN, "+3", 3.0),
    (EN, ".5", 0.5),
    (EN, "5.", 5.0),
    (EN, "1e3", 1000.0),
    (EN, "2.5E-3", 0.0025),
    (DE, "1.234,5", 1234.5),
    (DE, "-0,5", -0.5),
    (NB, "1\u00a0234,5", 1234.5),
    (NB, "\u22122,5", -2.5),
])
def test_parse_number(fmt, text, expected):
    assert parse_number(text, fmt) == pytest.approx(expected)

@pytest.mark.parametrize("fmt, text", [
    (EN, ""),
    (EN, "1,2"),      # group of one digit
    (EN, "1.2.3"),
    (EN, "abc"),
    (EN, "1,5"),
    (DE, "1.5"),      # "." groups thousands in de-DE
    (NB, "-2,5"),     # nb-NO writes U+2212
    (EN, "--1"),
    (EN, "1e400"),    # overflows a float
    (EN, "-1e400"),
])
def test_parse_number_rejects(fmt, text):
    with pytest.raises(ValueError):
        parse_number(text, fmt)

def test_no_grouping_when_disabled():
    fmt = NumberFormat(".", None)
    assert parse_number("1234", fmt) == 1234
    with pytest.raises(ValueError):
        parse_number("1,234", fmt)


# -------------------------------
# Formatting numbers
# -------------------------------

@pytest.mark.parametrize("fmt, value, expected", [
    (EN, 1.5, "1.5"),
    (EN, 2.0, "2"),
    (EN, -0.1, "-0.1"),
    (EN, -0.0, "0"),
    (EN, 1e-7, "1e-07"),
    (DE, 1234.5, "1234,5"),
    (NB, -2.5, "\u22122,5"),
])
def test_format_number(fmt, value, expected):
    assert format_number(value, fmt) == expected

def test_format_number_with_digits_and_grouping():
    assert format_number(1234567.891, EN, digits=2, grouping=True) == "1,234,567.89"
    assert format_number(1234567.891, DE, digits=1, grouping=True) == "1.234.567,9"
    assert format_number(-0.004, EN, digits=2) == "0.00"

@pytest.mark.parametrize("value", [0.1, 1 / 3, 123456.789, 6.02214076e23, -1.602e-19, 1e16])
@pytest.mark.parametrize("fmt", [EN, DE, NB])
def test_format_then_parse_is_exact(fmt, value):
    assert parse_number(format_number(value, fmt), fmt) == value


# -------------------------------
# Culture catalog
# -------------------------------

def test_shipped_cultures():
    assert set(DEFAULT_CULTURES.names()) >= {"en-US", "en-GB", "de-DE", "ru-RU", "nb-NO"}
    assert DEFAULT_CULTURES.default.name == "en-US"
    assert DEFAULT_CULTURES.get("de-DE").number_format.decimal_separator == ","

def test_resolve():
    c = Culture("x-test", EN)
    assert DEFAULT_CULTURES.resolve(c) is c
    assert DEFAULT_CULTURES.resolve(None).name == "en-US"
    assert DEFAULT_CULTURES.resolve(None, "ru-RU").name == "ru-RU"
    with pytest.raises(UnknownCultureError):
        DEFAULT_CULTURES.resolve("xx-XX")

def test_unknown_culture_is_a_lookup_error():
    with pytest.raises(LookupError):
        CultureCatalog().get("en-US")

def test_register_twice_needs_replace():
    catalog = CultureCatalog([Culture("en-US", EN)])
    with pytest.raises(ValueError):
        catalog.register(Culture("en-US", DE))
    catalog.register(Culture("en-US", DE), replace=True)
    assert catalog.get("en-US").number_format is DE
    assert "en-US" in catalog
