"""Use case aggregating open investment positions."""

from ledger_engine.application.ports.positions_repository import (
    PositionsRepositoryPort,
)
from ledger_engine.domain.models import InvestmentSummary
from ledger_engine.domain.services.positions import summarize_positions
from ledger_engine.infrastructure.logging.logger import get_app_logger


class GetInvestmentSummaryUseCase:
    """Summarize principal, market value and profit over open positions."""

    def __init__(self, positions_repo: PositionsRepositoryPort, logger=None):
        self._positions_repo = positions_repo
        self._logger = logger or get_app_logger()

    def execute(self) -> InvestmentSummary:
        """Return totals over every position not marked sold.

        Returns:
            InvestmentSummary: Totals, blended return rate and counts.
        """
        summary = summarize_positions(
            self._positions_repo.list_open_positions()
        )
        self._logger.info(
            f"Investment summary: holdings={summary.holding_count}, "
            f"market value={summary.total_market_value}, "
            f"profit={summary.total_profit_loss}"
        )
        return summary


__all__ = ["GetInvestmentSummaryUseCase"]
