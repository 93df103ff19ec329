"""Use case capturing the current month's financial snapshot."""

from datetime import tzinfo

from ledger_engine.application.ports.accounts_repository import (
    AccountsRepositoryPort,
)
from ledger_engine.application.ports.clock import ClockPort
from ledger_engine.application.ports.snapshots_repository import (
    SnapshotsRepositoryPort,
)
from ledger_engine.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from ledger_engine.domain.models import MonthlySnapshot, TransactionType
from ledger_engine.domain.services.calendar_math import month_bounds
from ledger_engine.domain.services.snapshots import compute_monthly_snapshot
from ledger_engine.infrastructure.clock import SystemClock
from ledger_engine.infrastructure.logging.logger import get_app_logger


class CreateMonthlySnapshotUseCase:
    """Create or overwrite the snapshot of the month containing now.

    Running it again in the same month replaces the stored figures, so the
    month always holds exactly one snapshot reflecting the latest run.
    """

    def __init__(
        self,
        accounts_repo: AccountsRepositoryPort,
        transactions_repo: TransactionsRepositoryPort,
        snapshots_repo: SnapshotsRepositoryPort,
        clock: ClockPort | None = None,
        logger=None,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            accounts_repo: Port providing account balances.
            transactions_repo: Port providing monthly income and expense.
            snapshots_repo: Port storing snapshots.
            clock: Optional clock; defaults to the system clock.
            logger: Optional logger compatible with logging.Logger-like API.
            tz: Calendar time zone; None means system local time.
        """
        self._accounts_repo = accounts_repo
        self._transactions_repo = transactions_repo
        self._snapshots_repo = snapshots_repo
        self._clock = clock or SystemClock()
        self._logger = logger or get_app_logger()
        self._tz = tz

    def execute(self, now_ms: int | None = None) -> MonthlySnapshot:
        """Compute and store the snapshot.

        Args:
            now_ms: Capture time, epoch milliseconds; defaults to now.

        Returns:
            MonthlySnapshot: Stored snapshot with its id.
        """
        now = self._clock.now_millis() if now_ms is None else now_ms
        year, month, start_ms, end_ms = month_bounds(now, self._tz)

        accounts = self._accounts_repo.fetch_active_accounts()
        income = self._transactions_repo.sum_by_type(
            TransactionType.INCOME, start_ms, end_ms
        )
        expense = self._transactions_repo.sum_by_type(
            TransactionType.EXPENSE, start_ms, end_ms
        )
        snapshot = compute_monthly_snapshot(
            accounts,
            year=year,
            month=month,
            snapshot_date=now,
            monthly_income=income,
            monthly_expense=expense,
            logger=self._logger,
        )
        saved = self._snapshots_repo.upsert(snapshot)
        self._logger.info(
            f"Snapshot {year}-{month:02d} saved: "
            f"net worth={saved.net_worth}, accounts={len(saved.accounts)}"
        )
        return saved


__all__ = ["CreateMonthlySnapshotUseCase"]
