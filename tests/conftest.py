"""Shared fixtures for repository tests."""

import pytest
from sqlalchemy import create_engine

from ledger_engine.infrastructure.schema import ensure_schema


class SqliteDatabasePort:
    """DatabaseEnginePort serving a fixed engine."""

    def __init__(self, engine) -> None:
        self._engine = engine

    def get_ledger_engine(self):
        return self._engine


@pytest.fixture
def ledger_db(tmp_path):
    """Database port backed by a fresh SQLite file with the ledger schema."""
    engine = create_engine(f"sqlite:///{tmp_path / 'ledger.db'}", future=True)
    ensure_schema(engine)
    yield SqliteDatabasePort(engine)
    engine.dispose()
