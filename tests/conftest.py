# tests/conftest.py
import pytest

from quantlex.catalog.registry import DEFAULT_TABLE as _table
from quantlex.core.operators import get_default_network
from quantlex.parsing.parser import QuantityParser, get_default_parser


@pytest.fixture(scope="session")
def table():
    return _table


@pytest.fixture(scope="session")
def length(table):
    return table.get("Length")


@pytest.fixture(scope="session")
def duration(table):
    return table.get("Duration")


@pytest.fixture(scope="session")
def parser():
    return get_default_parser()


@pytest.fixture(scope="session")
def network():
    return get_default_network()


@pytest.fixture
def fresh_parser():
    # own caches, shared table
    return QuantityParser(table=_table)
