"""Domain models package."""

from .accounts import Account, AccountBucket, AccountSnapshot, AccountType
from .investments import HoldingType, InvestmentPosition, InvestmentSummary
from .recurring import RecurringFrequency, RecurringTemplate, RecurringTotals
from .snapshots import MonthlySnapshot, SnapshotHistoryEntry
from .transactions import LedgerTransaction, TransactionType

__all__ = [
    "Account",
    "AccountBucket",
    "AccountSnapshot",
    "AccountType",
    "HoldingType",
    "InvestmentPosition",
    "InvestmentSummary",
    "RecurringFrequency",
    "RecurringTemplate",
    "RecurringTotals",
    "MonthlySnapshot",
    "SnapshotHistoryEntry",
    "LedgerTransaction",
    "TransactionType",
]
