"""Table definitions for the ledger store.

Money columns are stored as decimal text so every backend keeps them exact.
Timestamps are epoch milliseconds.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.engine import Engine


metadata = MetaData()

accounts_table = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(128), nullable=False),
    Column("account_type", String(32), nullable=False),
    Column("balance", String(64), nullable=False, default="0"),
    Column("initial_balance", String(64), nullable=False, default="0"),
    Column("include_in_total", Boolean, nullable=False, default=True),
    Column("is_active", Boolean, nullable=False, default=True),
)

transactions_table = Table(
    "transactions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("transaction_type", String(16), nullable=False),
    Column("amount", String(64), nullable=False),
    Column("category_id", Integer, nullable=False),
    Column("account_id", Integer, nullable=False),
    Column("to_account_id", Integer),
    Column("date", BigInteger, nullable=False),
    Column("note", Text, nullable=False, default=""),
    Column("tags", Text, nullable=False, default=""),
    Column("created_at", BigInteger),
    Index("ix_transactions_type_date", "transaction_type", "date"),
)

recurring_table = Table(
    "recurring_transactions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(128), nullable=False),
    Column("amount", String(64), nullable=False),
    Column("transaction_type", String(16), nullable=False),
    Column("category_id", Integer, nullable=False),
    Column("account_id", Integer, nullable=False),
    Column("frequency", String(16), nullable=False),
    Column("day_of_period", Integer, nullable=False, default=1),
    Column("month", Integer, nullable=False, default=1),
    Column("note", Text, nullable=False, default=""),
    Column("start_date", BigInteger, nullable=False),
    Column("end_date", BigInteger),
    Column("next_execution_date", BigInteger, nullable=False),
    Column("last_executed_date", BigInteger),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("auto_execute", Boolean, nullable=False, default=True),
    Column("remind_before", Boolean, nullable=False, default=False),
    Column("remind_days_before", Integer, nullable=False, default=1),
    Column("execution_count", Integer, nullable=False, default=0),
    Column("created_at", BigInteger),
    Column("updated_at", BigInteger),
    Column("version", Integer, nullable=False, default=0),
)

holdings_table = Table(
    "investment_holdings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("account_id", Integer, nullable=False),
    Column("name", String(128), nullable=False),
    Column("code", String(32), nullable=False, default=""),
    Column("holding_type", String(32), nullable=False),
    Column("quantity", String(64), nullable=False),
    Column("cost_price", String(64), nullable=False),
    Column("current_price", String(64), nullable=False),
    Column("principal", String(64), nullable=False),
    Column("market_value", String(64), nullable=False),
    Column("profit_loss", String(64), nullable=False),
    Column("return_rate", String(64), nullable=False),
    Column("first_buy_date", BigInteger, nullable=False),
    Column("last_update_date", BigInteger),
    Column("note", Text, nullable=False, default=""),
    Column("is_sold", Boolean, nullable=False, default=False),
    Column("version", Integer, nullable=False, default=0),
    Index("ix_holdings_account_code", "account_id", "code"),
    # One open position per account and non-empty code.
    Index(
        "uq_holdings_open_code",
        "account_id",
        "code",
        unique=True,
        sqlite_where=text("code != '' AND is_sold = 0"),
        postgresql_where=text("code <> '' AND is_sold = false"),
    ),
)

snapshots_table = Table(
    "monthly_snapshots",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("year", Integer, nullable=False),
    Column("month", Integer, nullable=False),
    Column("snapshot_date", BigInteger, nullable=False),
    Column("total_assets", String(64), nullable=False),
    Column("total_liabilities", String(64), nullable=False),
    Column("net_worth", String(64), nullable=False),
    Column("cash_assets", String(64), nullable=False),
    Column("investment_assets", String(64), nullable=False),
    Column("investment_principal", String(64), nullable=False),
    Column("investment_return", String(64), nullable=False),
    Column("monthly_income", String(64), nullable=False),
    Column("monthly_expense", String(64), nullable=False),
    Column("monthly_balance", String(64), nullable=False),
    Column("savings_rate", String(64), nullable=False),
    Column("accounts_json", Text, nullable=False, default=""),
    Column("created_at", BigInteger),
    UniqueConstraint("year", "month", name="uq_monthly_snapshots_month"),
)


def ensure_schema(engine: Engine) -> list[str]:
    """Create any missing ledger tables.

    Args:
        engine: Engine connected to the ledger database.

    Returns:
        list[str]: Names of all ledger tables.
    """
    metadata.create_all(engine, checkfirst=True)
    return sorted(metadata.tables)


__all__ = [
    "metadata",
    "accounts_table",
    "transactions_table",
    "recurring_table",
    "holdings_table",
    "snapshots_table",
    "ensure_schema",
]
