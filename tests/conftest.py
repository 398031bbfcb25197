"""
Pytest configuration and fixtures
"""

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from export.stores.memory_store import MemoryStore
from models.base import ColumnType
from models.row import LinkList, Row
from schemas.options import ExportOptions
from schemas.table import ColumnSpec, TableSchema


class FixedDateFormatter:
    """Deterministic date formatter for assertions"""

    def format(self, value: datetime) -> str:
        return value.strftime("%Y-%m-%d %H:%M:%S")


@pytest.fixture
def date_formatter():
    return FixedDateFormatter()


@pytest.fixture
def export_options():
    """Default options, independent of the environment"""
    return ExportOptions()


@pytest.fixture
def person_schema():
    return TableSchema(
        name="class_Person",
        columns=[
            ColumnSpec(name="name", column_type=ColumnType.STRING),
            ColumnSpec(name="age", column_type=ColumnType.INTEGER),
        ]
    )


@pytest.fixture
def dog_schema():
    return TableSchema(
        name="class_Dog",
        columns=[
            ColumnSpec(name="name", column_type=ColumnType.STRING),
            ColumnSpec(name="weight", column_type=ColumnType.DOUBLE),
            ColumnSpec(name="owner", column_type=ColumnType.OBJECT, target_table="class_Person"),
            ColumnSpec(name="born", column_type=ColumnType.DATE),
        ]
    )


@pytest.fixture
def kennel_schema():
    return TableSchema(
        name="class_Kennel",
        columns=[
            ColumnSpec(name="dogs", column_type=ColumnType.LIST, target_table="class_Dog"),
            ColumnSpec(name="scores", column_type=ColumnType.FLOAT_LIST),
            ColumnSpec(name="open", column_type=ColumnType.BOOLEAN),
        ]
    )


@pytest.fixture
def memory_store(person_schema, dog_schema, kennel_schema):
    """Store with user tables, an internal table and a schemaless table"""
    store = MemoryStore()
    store.add_table(TableSchema(name="metadata", columns=[
        ColumnSpec(name="version", column_type=ColumnType.INTEGER),
    ]), [{"version": 3}])
    store.add_table(person_schema, [
        {"name": "Alice", "age": 30},
        {"name": "Bob", "age": None},
    ])
    store.add_table(dog_schema, [
        Row(index=7, values={
            "name": "Rex",
            "weight": 12.5,
            "owner": 0,
            "born": datetime(2024, 1, 15, 10, 0, 0),
        }),
        Row(index=8, values={
            "name": "Fido",
            "weight": float("nan"),
            "owner": None,
            "born": None,
        }),
    ])
    store.add_table(kennel_schema, [
        {"dogs": LinkList("class_Dog", [7, 8]), "scores": [1.5, float("inf")], "open": True},
        {"dogs": None, "scores": None, "open": False},
    ])
    return store


@pytest.fixture
def sqlite_engine():
    """In-memory SQLite engine shared across connections"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()
