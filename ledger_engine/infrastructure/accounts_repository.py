"""SQLAlchemy-backed repository for ledger accounts."""

from sqlalchemy import text

from ledger_engine.application.ports.accounts_repository import (
    AccountsRepositoryPort,
)
from ledger_engine.application.ports.database import DatabaseEnginePort
from ledger_engine.domain.models import Account, AccountType
from ledger_engine.utils.decimal_utils import coerce_decimal


class SqlAlchemyAccountsRepository(AccountsRepositoryPort):
    """Repository backed by SQLAlchemy for ledger accounts."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_active_accounts(self) -> list[Account]:
        """Return active accounts from the database."""
        query = text(
            """
            SELECT id, name, account_type, balance, initial_balance,
                   include_in_total, is_active
            FROM accounts
            WHERE is_active = :is_active
            ORDER BY id
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, {"is_active": True}).all()
        return [
            Account(
                id=row.id,
                name=row.name,
                account_type=AccountType(row.account_type),
                balance=coerce_decimal(row.balance),
                initial_balance=coerce_decimal(row.initial_balance),
                include_in_total=bool(row.include_in_total),
                is_active=bool(row.is_active),
            )
            for row in rows
        ]


__all__ = ["SqlAlchemyAccountsRepository"]
