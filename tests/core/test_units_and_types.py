import pytest

from quantlex.catalog.prefixes import PREFIXES_BY_NAME
from quantlex.core.dimensions import LENGTH, TEMPERATURE
from quantlex.core.quantity_type import CompositeGrammar, CompositePart, QuantityType
from quantlex.core.unit import AffineUnit, LinearUnit


def _length_type(*extra):
    units = (
        LinearUnit.define("Meter", "Length", 1.0, {"en-US": ("m",)}),
        LinearUnit.define("Foot", "Length", 0.3048, {"en-US": ("ft",)}),
    ) + extra
    return QuantityType("Length", LENGTH, "Meter", units)


# -------------------------------
# Units
# -------------------------------

def test_linear_unit_conversions():
    ft = LinearUnit.define("Foot", "Length", 0.3048)
    assert ft.is_linear
    assert ft.to_base(10) == pytest.approx(3.048)
    assert ft.from_base(3.048) == pytest.approx(10)

@pytest.mark.parametrize("scale", [0.0, -1.0, float("inf"), float("nan")])
def test_linear_unit_rejects_bad_scale(scale):
    with pytest.raises(ValueError):
        LinearUnit.define("Bad", "Length", scale)

def test_abbreviations_in_culture():
    m = LinearUnit.define("Meter", "Length", 1.0, {"en-US": ("m",), "ru-RU": "м"})
    assert m.abbreviations_in("en-US") == ("m",)
    assert m.abbreviations_in("ru-RU") == ("м",)
    assert m.abbreviations_in("de-DE") == ()

def test_with_prefix_synthesizes_unit():
    g = LinearUnit.define("Gram", "Mass", 1e-3, {"en-US": ("g",)}, prefixes=("Kilo",))
    kg = g.with_prefix(PREFIXES_BY_NAME["Kilo"])
    assert kg.name == "Kilogram"
    assert kg.scale == pytest.approx(1.0)
    assert kg.parent == "Gram" and kg.prefix == "Kilo"
    assert kg.prefixes == () and kg.abbreviations == ()

def test_prefix_name_lowercases_parent():
    mps = LinearUnit.define("MeterPerSecond", "Speed", 1.0)
    assert mps.with_prefix(PREFIXES_BY_NAME["Kilo"]).name == "KilometerPerSecond"

def test_prefixes_do_not_stack():
    g = LinearUnit.define("Gram", "Mass", 1e-3)
    kg = g.with_prefix(PREFIXES_BY_NAME["Kilo"])
    with pytest.raises(ValueError):
        kg.with_prefix(PREFIXES_BY_NAME["Milli"])

def test_affine_unit_conversions():
    c = AffineUnit.define("DegreeCelsius", "Temperature", 1.0, 273.15)
    assert not c.is_linear
    assert c.to_base(0) == pytest.approx(273.15)
    assert c.from_base(373.15) == pytest.approx(100)

def test_affine_unit_rejects_prefixes():
    with pytest.raises(ValueError):
        AffineUnit("DegreeCelsius", "Temperature", 1.0, 273.15, prefixes=("Kilo",))


# -------------------------------
# Quantity types
# -------------------------------

def test_quantity_type_lookup():
    t = _length_type()
    assert t.base.name == "Meter"
    assert "Foot" in t
    assert t.unit("Foot").scale == 0.3048
    assert [u.name for u in t] == ["Meter", "Foot"]
    with pytest.raises(ValueError):
        t.unit("Parsec")

def test_quantity_type_requires_its_base_unit():
    units = (LinearUnit.define("Foot", "Length", 0.3048),)
    with pytest.raises(ValueError):
        QuantityType("Length", LENGTH, "Meter", units)

def test_quantity_type_rejects_duplicate_units():
    with pytest.raises(ValueError):
        _length_type(LinearUnit.define("Foot", "Length", 0.3048))

def test_quantity_type_rejects_foreign_units():
    with pytest.raises(ValueError):
        _length_type(LinearUnit.define("Kelvin", "Temperature", 1.0))

def test_composite_must_reference_known_units():
    grammar = CompositeGrammar("FeetInches", (CompositePart("Foot"), CompositePart("Inch")))
    units = (LinearUnit.define("Meter", "Length", 1.0), LinearUnit.define("Foot", "Length", 0.3048))
    with pytest.raises(ValueError):
        QuantityType("Length", LENGTH, "Meter", units, (grammar,))

def test_composite_grammar_needs_two_parts():
    with pytest.raises(ValueError):
        CompositeGrammar("Lonely", (CompositePart("Foot"),))

def test_composite_lookup():
    t = _length_type()
    with pytest.raises(TypeError):
        t.composite()

def test_construction_helpers():
    t = _length_type()
    q = t.quantity(2, "Foot")
    assert q.value == 2.0 and q.unit.name == "Foot"
    assert t.from_base(3.0).unit.name == "Meter"
    assert t.zero.value == 0.0

def test_temperature_type_with_affine_units():
    units = (
        LinearUnit.define("Kelvin", "Temperature", 1.0),
        AffineUnit.define("DegreeCelsius", "Temperature", 1.0, 273.15),
    )
    t = QuantityType("Temperature", TEMPERATURE, "Kelvin", units)
    assert t.quantity(25, "DegreeCelsius").base_value == pytest.approx(298.15)
