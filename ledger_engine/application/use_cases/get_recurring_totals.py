"""Use case summing the fixed income and expense of active templates."""

from ledger_engine.application.ports.recurring_repository import (
    RecurringRepositoryPort,
)
from ledger_engine.domain.models import RecurringTotals, TransactionType
from ledger_engine.infrastructure.logging.logger import get_app_logger


class GetRecurringTotalsUseCase:
    """Return per-occurrence totals of active income and expense templates."""

    def __init__(self, recurring_repo: RecurringRepositoryPort, logger=None):
        self._recurring_repo = recurring_repo
        self._logger = logger or get_app_logger()

    def execute(self) -> RecurringTotals:
        totals = RecurringTotals(
            fixed_income=self._recurring_repo.sum_active_amounts(
                TransactionType.INCOME
            ),
            fixed_expense=self._recurring_repo.sum_active_amounts(
                TransactionType.EXPENSE
            ),
        )
        self._logger.info(
            f"Recurring totals: income={totals.fixed_income}, "
            f"expense={totals.fixed_expense}"
        )
        return totals


__all__ = ["GetRecurringTotalsUseCase"]
