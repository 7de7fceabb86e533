from pathlib import Path

import pytest

from detector import ConnectionDetector
from models import TableNode
from schema_parser import SchemaParser

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def detector():
    return ConnectionDetector()


@pytest.fixture
def palette_tables():
    """customers, orders, products as loaded from the palette catalog."""
    raw = (FIXTURES / "palette.yaml").read_text(encoding="utf-8")
    return SchemaParser().parse(raw, fmt="yaml")


@pytest.fixture
def make_table():
    def _make(tid, columns, name=None):
        return TableNode(id=tid, name=name or tid.title(), columns=columns)
    return _make
