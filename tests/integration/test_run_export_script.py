"""
Tests for the export script
"""

import json
from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine, insert
from scripts.run_export import parse_args, run_export


def _create_store(path):
    engine = create_engine(f"sqlite:///{path}")
    metadata = MetaData()
    person = Table(
        "class_Person", metadata,
        Column("id", Integer, primary_key=True),
        Column("name", String(50)),
    )
    with engine.begin() as conn:
        metadata.create_all(conn)
        conn.execute(insert(person), [{"id": 0, "name": "Alice"}])
    engine.dispose()


def test_run_export_writes_file(tmp_path):
    db_path = tmp_path / "store.db"
    output = tmp_path / "out.json"
    _create_store(db_path)

    exit_code = run_export([
        "--database-url", f"sqlite:///{db_path}",
        "--output", str(output),
        "--null-value", "NULL",
    ])

    assert exit_code == 0
    assert json.loads(output.read_text(encoding="utf-8")) == {
        "class_Person": [{"index": 0, "name": "Alice"}]
    }


def test_run_export_reports_failure(tmp_path):
    exit_code = run_export([
        "--database-url", f"sqlite:///{tmp_path / 'missing' / 'store.db'}",
        "--output", str(tmp_path / "out.json"),
    ])

    assert exit_code == 1
    assert not (tmp_path / "out.json").exists()


def test_log_level_argument():
    assert parse_args(["--log-level", "DEBUG"]).log_level == "DEBUG"
    assert parse_args([]).log_level is None
