"""CLI adapter creating the ledger tables."""

from ledger_engine.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from ledger_engine.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from ledger_engine.infrastructure.schema import ensure_schema


def main() -> None:
    """Create any missing tables in the configured database."""
    get_usage_logger().info("init_db_cli invoked")
    logger = get_app_logger()
    db_adapter = SqlAlchemyDatabaseEngineAdapter()

    tables = ensure_schema(db_adapter.get_ledger_engine())

    logger.info(f"Ledger schema ready: {', '.join(tables)}")
    print(f"Ledger schema ready ({len(tables)} tables).")


if __name__ == "__main__":  # pragma: no cover
    main()
