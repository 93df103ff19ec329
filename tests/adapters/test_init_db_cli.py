"""Tests for the init_db_cli adapter."""

from unittest.mock import MagicMock

from sqlalchemy import create_engine, inspect

from ledger_engine.adapters import init_db_cli


def test_main_creates_schema(monkeypatch, capsys, tmp_path):
    """The CLI should create the ledger tables on the configured engine."""
    engine = create_engine(f"sqlite:///{tmp_path / 'cli.db'}")

    class _Adapter:
        def get_ledger_engine(self):
            return engine

    monkeypatch.setattr(
        init_db_cli, "SqlAlchemyDatabaseEngineAdapter", _Adapter
    )
    monkeypatch.setattr(init_db_cli, "get_app_logger", MagicMock)
    monkeypatch.setattr(init_db_cli, "get_usage_logger", MagicMock)

    init_db_cli.main()

    assert "recurring_transactions" in inspect(engine).get_table_names()
    assert "5 tables" in capsys.readouterr().out
    engine.dispose()
