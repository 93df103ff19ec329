"""Domain package for business rules and core models."""

from .constants import ACCOUNT_BUCKETS, bucket_for
from .errors import (
    DuplicatePositionError,
    InsufficientQuantityError,
    LedgerError,
    StaleRecordError,
)
from .models import (
    Account,
    AccountBucket,
    AccountSnapshot,
    AccountType,
    HoldingType,
    InvestmentPosition,
    InvestmentSummary,
    LedgerTransaction,
    MonthlySnapshot,
    RecurringFrequency,
    RecurringTemplate,
    TransactionType,
)

__all__ = [
    "ACCOUNT_BUCKETS",
    "bucket_for",
    "DuplicatePositionError",
    "InsufficientQuantityError",
    "LedgerError",
    "StaleRecordError",
    "Account",
    "AccountBucket",
    "AccountSnapshot",
    "AccountType",
    "HoldingType",
    "InvestmentPosition",
    "InvestmentSummary",
    "LedgerTransaction",
    "MonthlySnapshot",
    "RecurringFrequency",
    "RecurringTemplate",
    "TransactionType",
]
