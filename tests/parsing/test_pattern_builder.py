import re
import threading

import pytest

from quantlex.catalog.registry import UnitDefinitionTable
from quantlex.core.dimensions import LENGTH
from quantlex.core.errors import AbbreviationNotFound, NoAbbreviationsForUnit
from quantlex.core.unit import LinearUnit
from quantlex.parsing.abbreviations import AbbreviationResolver
from quantlex.parsing.patterns import PatternBuilder


@pytest.fixture
def builder():
    return PatternBuilder()


def test_anchored_pattern_has_named_groups(builder):
    source = builder.build_unit_pattern("Length", "Foot")
    assert source.startswith("^") and source.endswith("$")
    m = re.match(source, "2.5 ft")
    assert m.group("value") == "2.5"
    assert m.group("unit") == "ft"

def test_unanchored_fragment_has_no_groups(builder):
    source = builder.build_unit_pattern("Length", "Foot", match_entire_string=False)
    assert not source.startswith("^")
    assert re.compile(source).groups == 0
    assert re.search(source, "about 2 ft or so")

def test_abbreviations_are_escaped(builder):
    source = builder.build_unit_pattern("Volume", "UsGallon")
    assert re.match(source, "2 gal (U.S.)")
    assert re.match(source, "2 gal")
    assert not re.match(source, "2 gal (UxSx)")

def test_whitespace_between_number_and_unit_is_optional(builder):
    source = builder.build_unit_pattern("Length", "Inch")
    assert re.match(source, '4"')
    assert re.match(source, "4 in")
    assert re.match(source, "4in")

def test_longest_abbreviation_wins_in_group(builder):
    m = builder.unit_pattern("Duration", "Second").match("3 seconds")
    assert m.group("unit") == "seconds"

def test_number_is_culture_specific(builder):
    en = builder.unit_pattern("Length", "Meter", "en-US")
    de = builder.unit_pattern("Length", "Meter", "de-DE")
    assert en.match("1,234.5 m") and not en.match("1.234,5 m")
    assert de.match("1.234,5 m") and not de.match("1,234.5 m")
    assert builder.number_pattern("de-DE") != builder.number_pattern("en-US")

def test_patterns_are_cached(builder):
    assert builder.unit_pattern("Length", "Foot") is builder.unit_pattern("Length", "Foot")
    assert builder.unit_pattern("Length", "Foot") is not builder.unit_pattern("Length", "Foot", "ru-RU")
    assert builder.composite_pattern("Length") is builder.composite_pattern("Length", "FeetInches")

def test_pattern_records_its_unit(builder):
    p = builder.unit_pattern("Mass", "Kilogram")
    assert p.groups == {"unit": ("Mass", "Kilogram")}
    assert p.regex.pattern == p.source

def test_composite_pattern(builder):
    p = builder.composite_pattern("Length", culture="en-US")
    assert p.groups == {"part0": ("Length", "Foot"), "part1": ("Length", "Inch")}
    m = p.match("2 ft 4 in")
    assert m.group("part0") == "2 ft"
    assert m.group("part1") == "4 in"
    assert p.match("2′4″")
    assert not p.match("2 ft")

def test_composite_requires_a_grammar(builder):
    with pytest.raises(TypeError):
        builder.composite_pattern("Area")

def test_no_abbreviations_for_unit():
    t = UnitDefinitionTable()
    t.define("Length", LENGTH, "Meter", [
        LinearUnit.define("Meter", "Length", 1.0, {"en-US": ("m",)}),
        LinearUnit.define("Rod", "Length", 5.0292),
    ])
    b = PatternBuilder(AbbreviationResolver(t))
    with pytest.raises(NoAbbreviationsForUnit):
        b.build_unit_pattern("Length", "Rod")
    # still an AbbreviationNotFound for callers that catch the broader error
    with pytest.raises(AbbreviationNotFound):
        b.unit_pattern("Length", "Rod")

def test_concurrent_compilation_yields_one_pattern():
    b = PatternBuilder()
    barrier = threading.Barrier(8)
    seen = []

    def worker():
        barrier.wait()
        seen.append(b.unit_pattern("Pressure", "Kilopascal", "ru-RU"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()
    assert all(p is seen[0] for p in seen)
