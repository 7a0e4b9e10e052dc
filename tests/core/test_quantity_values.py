import math
from datetime import timedelta

import pytest

from quantlex.core.errors import DivisionByZero, IncompatibleQuantitiesError


# -------------------------------
# Conversion
# -------------------------------

def test_to_and_value_in(length):
    q = length.quantity(1, "Foot")
    assert q.value_in("Inch") == pytest.approx(12)
    assert q.to("Meter").value == pytest.approx(0.3048)
    assert q.to("Foot") is q
    assert q.to_base().unit.name == "Meter"

def test_prefixed_units_convert(table):
    mass = table.get("Mass")
    assert mass.quantity(2500, "Gram").value_in("Kilogram") == pytest.approx(2.5)
    assert mass.quantity(1, "Kilogram").base_value == 1.0

def test_affine_conversion(table):
    t = table.get("Temperature")
    assert t.quantity(100, "DegreeCelsius").value_in("DegreeFahrenheit") == pytest.approx(212)
    assert t.quantity(32, "DegreeFahrenheit").value_in("DegreeCelsius") == pytest.approx(0, abs=1e-9)

def test_unit_from_another_type_rejected(length, duration):
    from quantlex.core.quantity import Quantity

    with pytest.raises(ValueError):
        Quantity(1.0, duration.unit("Second"), length)


# -------------------------------
# Comparisons and hashing
# -------------------------------

def test_equality_across_units(length):
    assert length.quantity(1, "Foot") == length.quantity(12, "Inch")
    assert length.quantity(1, "Foot") != length.quantity(13, "Inch")

def test_equality_is_tolerant(length):
    a = length.quantity(1.0 + 1e-15)
    b = length.quantity(1.0)
    assert a == b

def test_different_types_never_equal(length, duration):
    assert length.quantity(1) != duration.quantity(1)

def test_ordering(length):
    assert length.quantity(1, "Foot") < length.quantity(1, "Meter")
    assert length.quantity(12, "Inch") <= length.quantity(1, "Foot")
    assert length.quantity(1, "Mile") > length.quantity(1, "Kilometer")

def test_ordering_requires_same_type(length, duration):
    with pytest.raises(IncompatibleQuantitiesError):
        _ = length.quantity(1) < duration.quantity(1)

def test_quantities_are_unhashable_but_have_keys(length):
    q = length.quantity(1, "Foot")
    with pytest.raises(TypeError):
        hash(q)
    assert q.as_key(9) == length.quantity(12, "Inch").as_key(9)
    assert length.quantity(-0.0).as_key() == length.quantity(0.0).as_key()


# -------------------------------
# Same-type arithmetic
# -------------------------------

def test_addition_keeps_left_unit(length):
    s = length.quantity(2, "Foot") + length.quantity(6, "Inch")
    assert s.unit.name == "Foot"
    assert s.value == pytest.approx(2.5)

def test_subtraction(length):
    d = length.quantity(1, "Meter") - length.quantity(50, "Centimeter")
    assert d.unit.name == "Meter"
    assert d.value == pytest.approx(0.5)

def test_cross_type_addition_rejected(length, duration):
    with pytest.raises(IncompatibleQuantitiesError):
        _ = length.quantity(1) + duration.quantity(1)
    # also a TypeError for callers that catch the builtin
    with pytest.raises(TypeError):
        _ = length.quantity(1) - duration.quantity(1)

def test_affine_addition_sums_base_values(table):
    t = table.get("Temperature")
    s = t.quantity(10, "DegreeCelsius") + t.quantity(1, "Kelvin")
    assert s.unit.name == "DegreeCelsius"
    assert s.base_value == pytest.approx(283.15 + 1)

def test_unary_operators(length):
    q = length.quantity(-3, "Foot")
    assert (-q).value == 3
    assert abs(q).value == 3
    assert (+q) is q


# -------------------------------
# Scalars
# -------------------------------

def test_scalar_multiplication_and_division(length):
    q = length.quantity(2, "Foot")
    assert (q * 3).value == 6 and (3 * q).value == 6
    assert (q / 4).value == 0.5
    assert (q * 3).unit.name == "Foot"

def test_scalar_division_by_zero(length):
    with pytest.raises(DivisionByZero):
        length.quantity(2) / 0
    with pytest.raises(ZeroDivisionError):
        length.quantity(2) / 0.0


# -------------------------------
# Cross-type operators go through the network
# -------------------------------

def test_length_times_length_is_area(length):
    a = length.quantity(2) * length.quantity(3)
    assert a.quantity_type.name == "Area"
    assert a.unit.name == "SquareMeter"
    assert a.value == pytest.approx(6)

def test_length_divided_by_duration_is_speed(length, duration):
    v = length.quantity(100) / duration.quantity(10)
    assert v.quantity_type.name == "Speed"
    assert v.value == pytest.approx(10)

def test_length_divided_by_timedelta(length):
    v = length.quantity(3600) / timedelta(hours=1)
    assert v.quantity_type.name == "Speed"
    assert v.value == pytest.approx(1)

def test_timedelta_times_speed(table):
    speed = table.get("Speed")
    d = timedelta(minutes=1) * speed.quantity(2)
    assert d.quantity_type.name == "Length"
    assert d.value == pytest.approx(120)

def test_unsupported_operand_returns_notimplemented(length):
    with pytest.raises(TypeError):
        _ = length.quantity(1) * "2"


# -------------------------------
# Rendering
# -------------------------------

def test_repr_uses_default_abbreviation(length, table):
    assert repr(length.quantity(2.5, "Foot")) == "2.5 ft"
    assert repr(table.get("Mass").quantity(1, "Kilogram")) == "1 kg"

def test_format_specs(length):
    q = length.quantity(1, "Foot")
    assert f"{q}" == "1 ft"
    assert f"{q:base}" == "0.3048 m"
    with pytest.raises(ValueError):
        format(q, "bogus")

def test_to_string_is_culture_aware(length):
    q = length.quantity(-1.5, "Meter")
    assert q.to_string() == "-1.5 m"
    assert q.to_string("de-DE") == "-1,5 m"
    assert q.to_string("ru-RU") == "-1,5 м"
    assert q.to_string("nb-NO") == "\u22121,5 m"
    assert length.quantity(1, "Kilometer").to_string(unit="Meter") == "1000 m"
