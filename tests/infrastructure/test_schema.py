"""Tests for the ledger schema helper."""

from sqlalchemy import create_engine, inspect


from ledger_engine.infrastructure.schema import ensure_schema


def test_ensure_schema_creates_all_tables_idempotently(tmp_path) -> None:
    engine = create_engine(f"sqlite:///{tmp_path / 'schema.db'}")

    first = ensure_schema(engine)
    second = ensure_schema(engine)

    expected = [
        "accounts",
        "investment_holdings",
        "monthly_snapshots",
        "recurring_transactions",
        "transactions",
    ]
    assert first == expected
    assert second == expected
    assert sorted(inspect(engine).get_table_names()) == expected
    engine.dispose()
