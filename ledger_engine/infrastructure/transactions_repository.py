"""SQLAlchemy-backed repository for ledger transactions."""

from dataclasses import replace
from decimal import Decimal

from sqlalchemy import insert, text
from sqlalchemy.engine import Connection

from ledger_engine.application.ports.database import DatabaseEnginePort
from ledger_engine.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from ledger_engine.domain.models import LedgerTransaction, TransactionType
from ledger_engine.infrastructure.schema import transactions_table
from ledger_engine.utils.decimal_utils import coerce_decimal


def insert_transaction_row(
    conn: Connection,
    transaction: LedgerTransaction,
) -> int:
    """Insert a transaction on an open connection and return its id."""
    result = conn.execute(
        insert(transactions_table).values(
            transaction_type=transaction.transaction_type.value,
            amount=str(transaction.amount),
            category_id=transaction.category_id,
            account_id=transaction.account_id,
            to_account_id=transaction.to_account_id,
            date=transaction.date,
            note=transaction.note,
            tags=transaction.tags,
            created_at=transaction.created_at,
        )
    )
    return result.inserted_primary_key[0]


class SqlAlchemyTransactionsRepository(TransactionsRepositoryPort):
    """Repository backed by SQLAlchemy for ledger transactions."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def insert_transaction(
        self,
        transaction: LedgerTransaction,
    ) -> LedgerTransaction:
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            new_id = insert_transaction_row(conn, transaction)
        return replace(transaction, id=new_id)

    def sum_by_type(
        self,
        transaction_type: TransactionType,
        start_ms: int,
        end_ms: int,
    ) -> Decimal:
        """Return the summed amount of one type within ``[start, end)``.

        Amounts are stored as text, so the sum is taken in Python to keep
        decimal precision on every backend.
        """
        query = text(
            """
            SELECT amount
            FROM transactions
            WHERE transaction_type = :transaction_type
              AND date >= :start_ms
              AND date < :end_ms
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                query,
                {
                    "transaction_type": TransactionType(
                        transaction_type
                    ).value,
                    "start_ms": start_ms,
                    "end_ms": end_ms,
                },
            ).all()
        return sum(
            (coerce_decimal(row.amount) for row in rows),
            Decimal("0"),
        )

    def list_between(
        self,
        start_ms: int,
        end_ms: int,
    ) -> list[LedgerTransaction]:
        """Return transactions dated within ``[start, end)``, oldest first."""
        query = text(
            """
            SELECT id, transaction_type, amount, category_id, account_id,
                   to_account_id, date, note, tags, created_at
            FROM transactions
            WHERE date >= :start_ms AND date < :end_ms
            ORDER BY date, id
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                query, {"start_ms": start_ms, "end_ms": end_ms}
            ).all()
        return [
            LedgerTransaction(
                id=row.id,
                transaction_type=TransactionType(row.transaction_type),
                amount=coerce_decimal(row.amount),
                category_id=row.category_id,
                account_id=row.account_id,
                to_account_id=row.to_account_id,
                date=row.date,
                note=row.note,
                tags=row.tags,
                created_at=row.created_at,
            )
            for row in rows
        ]


__all__ = ["insert_transaction_row", "SqlAlchemyTransactionsRepository"]
