"""Port for ledger transaction storage."""

from decimal import Decimal
from typing import Protocol

from ledger_engine.domain.models import LedgerTransaction, TransactionType


class TransactionsRepositoryPort(Protocol):
    """Port exposing the transaction ledger."""

    def insert_transaction(
        self,
        transaction: LedgerTransaction,
    ) -> LedgerTransaction:
        """Store a transaction and return it with its id."""

    def sum_by_type(
        self,
        transaction_type: TransactionType,
        start_ms: int,
        end_ms: int,
    ) -> Decimal:
        """Return the summed amount of one type within ``[start, end)``."""


__all__ = ["TransactionsRepositoryPort"]
