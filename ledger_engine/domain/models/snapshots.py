"""Domain models for monthly snapshots."""

from dataclasses import dataclass
from decimal import Decimal

from ledger_engine.domain.models.accounts import AccountSnapshot


@dataclass(frozen=True)
class MonthlySnapshot:
    """Point-in-time rollup of net worth and cash flow for one month.

    Attributes:
        year: Calendar year of the snapshot.
        month: Calendar month (1-12); ``(year, month)`` is unique.
        snapshot_date: Capture time, epoch milliseconds.
        total_assets: Included non-liability balances.
        total_liabilities: Absolute liability balances.
        net_worth: Assets minus liabilities.
        cash_assets: Included cash-like balances.
        investment_assets: Included investment-like balances.
        investment_principal: Initial balances of those investment accounts.
        investment_return: Investment assets minus principal.
        monthly_income: Income transactions in the month.
        monthly_expense: Expense transactions in the month.
        monthly_balance: Income minus expense.
        savings_rate: Balance over income in percent, zero without income.
        accounts: Per-account balances at capture time.
    """

    year: int
    month: int
    snapshot_date: int
    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal
    cash_assets: Decimal
    investment_assets: Decimal
    investment_principal: Decimal
    investment_return: Decimal
    monthly_income: Decimal
    monthly_expense: Decimal
    monthly_balance: Decimal
    savings_rate: Decimal
    accounts: tuple[AccountSnapshot, ...] = ()
    created_at: int | None = None
    id: int | None = None


@dataclass(frozen=True)
class SnapshotHistoryEntry:
    """A stored snapshot paired with its change against the prior month."""

    snapshot: MonthlySnapshot
    net_worth_change: Decimal | None


__all__ = ["MonthlySnapshot", "SnapshotHistoryEntry"]
