"""Domain models for ledger transactions."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class TransactionType(str, Enum):
    """Direction of a ledger transaction."""

    EXPENSE = "EXPENSE"
    INCOME = "INCOME"
    TRANSFER = "TRANSFER"


@dataclass(frozen=True)
class LedgerTransaction:
    """A single ledger entry.

    Amounts are always positive; the direction is carried by
    ``transaction_type``.
    """

    transaction_type: TransactionType
    amount: Decimal
    category_id: int
    account_id: int
    date: int
    note: str = ""
    tags: str = ""
    to_account_id: int | None = None
    created_at: int | None = None
    id: int | None = None


__all__ = ["TransactionType", "LedgerTransaction"]
