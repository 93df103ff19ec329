"""Application ports package."""

from .accounts_repository import AccountsRepositoryPort
from .clock import ClockPort
from .database import DatabaseEnginePort
from .positions_repository import PositionsRepositoryPort
from .recurring_repository import RecurringRepositoryPort
from .snapshots_repository import SnapshotsRepositoryPort
from .transactions_repository import TransactionsRepositoryPort

__all__ = [
    "AccountsRepositoryPort",
    "ClockPort",
    "DatabaseEnginePort",
    "PositionsRepositoryPort",
    "RecurringRepositoryPort",
    "SnapshotsRepositoryPort",
    "TransactionsRepositoryPort",
]
