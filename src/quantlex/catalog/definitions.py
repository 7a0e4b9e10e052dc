"""
quantlex.catalog.definitions
============================

The shipped Unit Definition Table data: a representative set of quantity
types, each with its base unit, its units (scale to the base unit, metric
prefixes, per-culture abbreviations) and its composite grammars.

Declaration order matters: when two units of one quantity type share an
abbreviation, the parser picks the one declared first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Tuple

from quantlex.core.dimensions import (
    ACCELERATION,
    AREA,
    FORCE,
    KINEMATIC_VISCOSITY,
    LENGTH,
    MASS,
    PRESSURE,
    SPECIFIC_WEIGHT,
    SPEED,
    TEMPERATURE,
    TIME,
    TORQUE,
    VOLUME,
)
from quantlex.core.quantity_type import CompositeGrammar, CompositePart
from quantlex.core.unit import AffineUnit, LinearUnit, Unit

EN = "en-US"
RU = "ru-RU"

# (name, scale to base, {culture: abbreviations}, prefixes)
UnitRow = Tuple[str, float, Mapping[str, Tuple[str, ...]], Tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class QuantityDefinition:
    name: str
    dim: Dimension
    base_unit: str
    units: Tuple[Unit, ...]
    composites: Tuple[CompositeGrammar, ...] = ()


def _linear(quantity: str, rows: Iterable[UnitRow]) -> Tuple[Unit, ...]:
    return tuple(
        LinearUnit.define(name, quantity, scale, abbreviations, prefixes)
        for name, scale, abbreviations, prefixes in rows
    )


# --- shared scale factors ----------------------------------------------------
FOOT = 0.3048
INCH = 0.0254
YARD = 0.9144
MILE = 1609.344
NAUTICAL_MILE = 1852.0
POUND = 0.45359237
STANDARD_GRAVITY = 9.80665
POUND_FORCE = POUND * STANDARD_GRAVITY
CUBIC_FOOT = FOOT ** 3
CUBIC_INCH = INCH ** 3

_SI_SMALL = ("Nano", "Micro", "Milli", "Centi", "Deci")


LENGTH_UNITS = _linear("Length", (
    ("Meter",        1.0,           {EN: ("m",), RU: ("м",)}, _SI_SMALL + ("Hecto", "Kilo")),
    ("Foot",         FOOT,          {EN: ("ft", "'", "′"), RU: ("фут",)}, ()),
    ("Inch",         INCH,          {EN: ("in", "\"", "″"), RU: ("дюйм",)}, ()),
    ("Yard",         YARD,          {EN: ("yd",), RU: ("ярд",)}, ()),
    ("Mile",         MILE,          {EN: ("mi",), RU: ("миля",)}, ()),
    ("NauticalMile", NAUTICAL_MILE, {EN: ("NM", "nmi")}, ()),
    ("Mil",          INCH * 1e-3,   {EN: ("mil",)}, ()),
    ("Microinch",    INCH * 1e-6,   {EN: ("µin", "μin"), RU: ("микродюйм",)}, ()),
))

AREA_UNITS = _linear("Area", (
    ("SquareMeter",      1.0,           {EN: ("m²", "m^2"), RU: ("м²",)}, ()),
    ("SquareKilometer",  1e6,           {EN: ("km²", "km^2"), RU: ("км²",)}, ()),
    ("SquareCentimeter", 1e-4,          {EN: ("cm²", "cm^2"), RU: ("см²",)}, ()),
    ("SquareMillimeter", 1e-6,          {EN: ("mm²", "mm^2"), RU: ("мм²",)}, ()),
    ("SquareFoot",       FOOT ** 2,     {EN: ("ft²", "ft^2"), RU: ("фут²",)}, ()),
    ("SquareInch",       INCH ** 2,     {EN: ("in²", "in^2"), RU: ("дюйм²",)}, ()),
    ("SquareYard",       YARD ** 2,     {EN: ("yd²", "yd^2"), RU: ("ярд²",)}, ()),
    ("SquareMile",       MILE ** 2,     {EN: ("mi²", "mi^2"), RU: ("миля²",)}, ()),
    ("Hectare",          1e4,           {EN: ("ha",), RU: ("га",)}, ()),
    ("Acre",             4046.8564224,  {EN: ("ac",), RU: ("акр",)}, ()),
))

VOLUME_UNITS = _linear("Volume", (
    ("CubicMeter",      1.0,            {EN: ("m³", "m^3"), RU: ("м³",)}, ()),
    ("CubicCentimeter", 1e-6,           {EN: ("cm³", "cm^3"), RU: ("см³",)}, ()),
    ("Liter",           1e-3,           {EN: ("l", "L"), RU: ("л",)}, ("Micro", "Milli", "Centi", "Deci", "Hecto", "Kilo")),
    ("CubicFoot",       CUBIC_FOOT,     {EN: ("ft³", "ft^3"), RU: ("фут³",)}, ()),
    ("CubicInch",       CUBIC_INCH,     {EN: ("in³", "in^3"), RU: ("дюйм³",)}, ()),
    # "gal" is shared; US gallon is declared first and wins for a bare "gal".
    ("UsGallon",        231 * CUBIC_INCH, {EN: ("gal (U.S.)", "gal")}, ()),
    ("ImperialGallon",  0.00454609,     {EN: ("gal (imp.)", "gal")}, ()),
))

DURATION_UNITS = _linear("Duration", (
    ("Second",  1.0,          {EN: ("s", "sec", "secs", "second", "seconds"), RU: ("с", "сек")}, ("Nano", "Micro", "Milli")),
    ("Minute",  60.0,         {EN: ("m", "min", "mins", "minute", "minutes"), RU: ("мин",)}, ()),
    ("Hour",    3600.0,       {EN: ("h", "hr", "hrs", "hour", "hours"), RU: ("ч", "час")}, ()),
    ("Day",     86400.0,      {EN: ("d", "day", "days"), RU: ("сут", "д")}, ()),
    ("Week",    604800.0,     {EN: ("wk", "week", "weeks"), RU: ("нед",)}, ()),
    ("Month30", 30 * 86400.0, {EN: ("mo", "month", "months"), RU: ("мес",)}, ()),
    ("Year365", 365 * 86400.0, {EN: ("yr", "year", "years"), RU: ("год",)}, ()),
))

SPEED_UNITS = _linear("Speed", (
    ("MeterPerSecond", 1.0,          {EN: ("m/s",), RU: ("м/с",)}, _SI_SMALL + ("Kilo",)),
    ("MeterPerMinute", 1 / 60,       {EN: ("m/min",), RU: ("м/мин",)}, ("Milli", "Centi", "Kilo")),
    ("MeterPerHour",   1 / 3600,     {EN: ("m/h",), RU: ("м/ч",)}, ("Milli", "Centi", "Kilo")),
    ("FootPerSecond",  FOOT,         {EN: ("ft/s",), RU: ("фут/с",)}, ()),
    ("FootPerMinute",  FOOT / 60,    {EN: ("ft/min",), RU: ("фут/мин",)}, ()),
    ("InchPerSecond",  INCH,         {EN: ("in/s",), RU: ("дюйм/с",)}, ()),
    ("MilePerHour",    MILE / 3600,  {EN: ("mph",), RU: ("миль/ч",)}, ()),
    ("Knot",           NAUTICAL_MILE / 3600, {EN: ("kn", "kt", "knot", "knots"), RU: ("уз.",)}, ()),
))

ACCELERATION_UNITS = _linear("Acceleration", (
    ("MeterPerSecondSquared", 1.0,              {EN: ("m/s²", "m/s^2"), RU: ("м/с²",)}, _SI_SMALL + ("Kilo",)),
    ("FootPerSecondSquared",  FOOT,             {EN: ("ft/s²", "ft/s^2"), RU: ("фут/с²",)}, ()),
    ("InchPerSecondSquared",  INCH,             {EN: ("in/s²", "in/s^2"), RU: ("дюйм/с²",)}, ()),
    ("StandardGravity",       STANDARD_GRAVITY, {EN: ("g",), RU: ("g",)}, ()),
))

MASS_UNITS = _linear("Mass", (
    ("Gram",     1e-3,                {EN: ("g",), RU: ("г",)}, _SI_SMALL + ("Deca", "Hecto", "Kilo")),
    ("Tonne",    1e3,                 {EN: ("t",), RU: ("т",)}, ("Kilo", "Mega")),
    ("Pound",    POUND,               {EN: ("lb", "lbs", "lbm"), RU: ("фунт",)}, ()),
    ("Ounce",    POUND / 16,          {EN: ("oz",), RU: ("унц",)}, ()),
    ("Stone",    POUND * 14,          {EN: ("st",)}, ()),
    ("ShortTon", POUND * 2000,        {EN: ("t (short)", "short tn", "ST"), RU: ("тонна малая",)}, ()),
    ("LongTon",  POUND * 2240,        {EN: ("long tn",), RU: ("тонна большая",)}, ()),
))

FORCE_UNITS = _linear("Force", (
    ("Newton",        1.0,               {EN: ("N",), RU: ("Н",)}, ("Micro", "Milli", "Deca", "Kilo", "Mega")),
    ("KilogramForce", STANDARD_GRAVITY,  {EN: ("kgf",), RU: ("кгс",)}, ()),
    ("PoundForce",    POUND_FORCE,       {EN: ("lbf",), RU: ("фунт-сила",)}, ()),
    ("OunceForce",    POUND_FORCE / 16,  {EN: ("ozf",), RU: ("унция-сила",)}, ()),
    ("Dyne",          1e-5,              {EN: ("dyn",), RU: ("дин",)}, ()),
    ("Poundal",       POUND * FOOT,      {EN: ("pdl",), RU: ("паундаль",)}, ()),
))

TORQUE_UNITS = _linear("Torque", (
    ("NewtonMeter",        1.0,                     {EN: ("N·m", "N*m"), RU: ("Н·м",)}, ("Milli", "Kilo", "Mega")),
    ("NewtonCentimeter",   1e-2,                    {EN: ("N·cm", "N*cm"), RU: ("Н·см",)}, ()),
    ("NewtonMillimeter",   1e-3,                    {EN: ("N·mm", "N*mm"), RU: ("Н·мм",)}, ()),
    ("PoundForceFoot",     POUND_FORCE * FOOT,      {EN: ("lbf·ft", "lbf*ft"), RU: ("фунт-сила·фут",)}, ()),
    ("PoundForceInch",     POUND_FORCE * INCH,      {EN: ("lbf·in", "lbf*in"), RU: ("фунт-сила·дюйм",)}, ()),
    ("KilogramForceMeter", STANDARD_GRAVITY,        {EN: ("kgf·m", "kgf*m"), RU: ("кгс·м",)}, ()),
))

PRESSURE_UNITS = _linear("Pressure", (
    ("Pascal",                  1.0,             {EN: ("Pa",), RU: ("Па",)}, ("Micro", "Milli", "Centi", "Deci", "Deca", "Hecto", "Kilo", "Mega", "Giga")),
    ("Bar",                     1e5,             {EN: ("bar",), RU: ("бар",)}, ("Micro", "Milli", "Centi", "Deci", "Kilo", "Mega")),
    ("Atmosphere",              101325.0,        {EN: ("atm",), RU: ("атм",)}, ()),
    ("TechnicalAtmosphere",     STANDARD_GRAVITY * 1e4, {EN: ("at",), RU: ("ат",)}, ()),
    ("PoundForcePerSquareInch", POUND_FORCE / INCH ** 2, {EN: ("psi", "lb/in²"), RU: ("psi",)}, ()),
    ("MillimeterOfMercury",     133.322387415,   {EN: ("mmHg",), RU: ("мм рт.ст.",)}, ()),
    ("Torr",                    101325.0 / 760,  {EN: ("torr",), RU: ("торр",)}, ()),
))

SPECIFIC_WEIGHT_UNITS = _linear("SpecificWeight", (
    ("NewtonPerCubicMeter",        1.0,                           {EN: ("N/m³",), RU: ("Н/м³",)}, ("Kilo", "Mega")),
    ("KilogramForcePerCubicMeter", STANDARD_GRAVITY,              {EN: ("kgf/m³",), RU: ("кгс/м³",)}, ()),
    ("PoundForcePerCubicFoot",     POUND_FORCE / CUBIC_FOOT,      {EN: ("lbf/ft³",), RU: ("фунт-сила/фут³",)}, ()),
    ("PoundForcePerCubicInch",     POUND_FORCE / CUBIC_INCH,      {EN: ("lbf/in³",), RU: ("фунт-сила/дюйм³",)}, ()),
))

KINEMATIC_VISCOSITY_UNITS = _linear("KinematicViscosity", (
    ("SquareMeterPerSecond", 1.0,       {EN: ("m²/s",), RU: ("м²/с",)}, ()),
    ("Stokes",               1e-4,      {EN: ("St",), RU: ("Ст",)}, ("Nano", "Micro", "Milli", "Centi", "Deci", "Kilo")),
    ("SquareFootPerSecond",  FOOT ** 2, {EN: ("ft²/s",), RU: ("фут²/с",)}, ()),
))

TEMPERATURE_UNITS: Tuple[Unit, ...] = (
    LinearUnit.define("Kelvin", "Temperature", 1.0, {EN: ("K",), RU: ("K",)}),
    AffineUnit.define("DegreeCelsius", "Temperature", 1.0, 273.15, {EN: ("°C",), RU: ("°C",)}),
    AffineUnit.define("DegreeFahrenheit", "Temperature", 5 / 9, 459.67 * 5 / 9, {EN: ("°F",), RU: ("°F",)}),
    LinearUnit.define("DegreeRankine", "Temperature", 5 / 9, {EN: ("°R",), RU: ("°R",)}),
)


# --- composite grammars --------------------------------------------------------
FEET_INCHES = CompositeGrammar(
    "FeetInches",
    (CompositePart("Foot", r"\s?"), CompositePart("Inch")),
    description="2' 4\" or 2 ft 4 in; whitespace is optional",
)

HOURS_MINUTES = CompositeGrammar(
    "HoursMinutes",
    (CompositePart("Hour", r"\s?"), CompositePart("Minute")),
    description="1 h 30 min; whitespace is optional",
)

STONE_POUNDS = CompositeGrammar(
    "StonePounds",
    (CompositePart("Stone", r"\s?"), CompositePart("Pound")),
    description="11 st 6 lb; whitespace is optional",
)


QUANTITY_DEFINITIONS: Tuple[QuantityDefinition, ...] = (
    QuantityDefinition("Length", LENGTH, "Meter", LENGTH_UNITS, (FEET_INCHES,)),
    QuantityDefinition("Area", AREA, "SquareMeter", AREA_UNITS),
    QuantityDefinition("Volume", VOLUME, "CubicMeter", VOLUME_UNITS),
    QuantityDefinition("Duration", TIME, "Second", DURATION_UNITS, (HOURS_MINUTES,)),
    QuantityDefinition("Speed", SPEED, "MeterPerSecond", SPEED_UNITS),
    QuantityDefinition("Acceleration", ACCELERATION, "MeterPerSecondSquared", ACCELERATION_UNITS),
    QuantityDefinition("Mass", MASS, "Kilogram", MASS_UNITS, (STONE_POUNDS,)),
    QuantityDefinition("Force", FORCE, "Newton", FORCE_UNITS),
    QuantityDefinition("Torque", TORQUE, "NewtonMeter", TORQUE_UNITS),
    QuantityDefinition("Pressure", PRESSURE, "Pascal", PRESSURE_UNITS),
    QuantityDefinition("SpecificWeight", SPECIFIC_WEIGHT, "NewtonPerCubicMeter", SPECIFIC_WEIGHT_UNITS),
    QuantityDefinition("KinematicViscosity", KINEMATIC_VISCOSITY, "SquareMeterPerSecond", KINEMATIC_VISCOSITY_UNITS),
    QuantityDefinition("Temperature", TEMPERATURE, "Kelvin", TEMPERATURE_UNITS),
)
