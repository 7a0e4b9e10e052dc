import importlib
from datetime import timedelta

import pytest

import quantlex
from quantlex.core.errors import QuantityFormatError


def test_version_is_exposed():
    assert isinstance(quantlex.__version__, str)
    assert quantlex.__version__

def test_lazy_defaults_are_shared():
    from quantlex.catalog.registry import DEFAULT_TABLE
    from quantlex.core.operators import get_default_network
    from quantlex.parsing.parser import get_default_parser

    assert quantlex.table is DEFAULT_TABLE
    assert quantlex.parser is get_default_parser()
    assert quantlex.network is get_default_network()

def test_unknown_module_attribute_raises_attributeerror():
    with pytest.raises(AttributeError):
        quantlex.does_not_exist

def test_dir_lists_lazy_names():
    names = dir(quantlex)
    assert {"table", "parser", "network", "parse"} <= set(names)

def test_parse_helpers():
    q = quantlex.parse("2.5 kg", "Mass")
    assert q.value == 2.5 and q.unit.name == "Kilogram"
    assert quantlex.try_parse("nope", "Mass") == (False, None)
    with pytest.raises(QuantityFormatError):
        quantlex.parse("nope", "Mass")

def test_arithmetic_helpers():
    d = quantlex.parse("100 m", "Length")
    v = quantlex.divide(d, timedelta(seconds=20))
    assert v.quantity_type.name == "Speed" and v.value == pytest.approx(5)
    assert quantlex.multiply(v, timedelta(seconds=20)) == d

def test_version_falls_back_to_pyproject(monkeypatch):
    from importlib import metadata

    def missing(name):
        raise metadata.PackageNotFoundError(name)

    monkeypatch.setattr(metadata, "version", missing)
    try:
        reloaded = importlib.reload(quantlex)
        assert reloaded.__version__ == "0.1.0"
    finally:
        monkeypatch.undo()
        importlib.reload(quantlex)
