import pytest
from hypothesis import given, settings, strategies as st

from quantlex.catalog.registry import DEFAULT_TABLE
from quantlex.parsing.culture import DEFAULT_CULTURES
from quantlex.parsing.formatter import QuantityFormatter

CASES = [
    (qtype.name, unit.name)
    for qtype in DEFAULT_TABLE
    for unit in qtype
]

values = st.floats(min_value=-1e12, max_value=1e12, allow_nan=False, allow_infinity=False)


@pytest.mark.parametrize("culture", DEFAULT_CULTURES.names())
@pytest.mark.parametrize("qtype, unit", CASES)
def test_format_then_parse(parser, culture, qtype, unit):
    formatter = QuantityFormatter()
    t = DEFAULT_TABLE.get(qtype)

    @settings(max_examples=20, deadline=None)
    @given(value=values)
    def check(value):
        q = t.quantity(value, unit)
        text = formatter.format(q, culture)
        back = parser.parse(text, qtype, culture)
        assert back.unit.name == unit, text
        assert back.value == value

    check()


@pytest.mark.parametrize("culture", DEFAULT_CULTURES.names())
def test_rounded_display_still_parses(parser, culture):
    q = DEFAULT_TABLE.get("Length").quantity(1234.5678, "Kilometer")
    text = QuantityFormatter().format(q, culture, digits=2)
    assert parser.parse(text, "Length", culture).value == pytest.approx(1234.57)
