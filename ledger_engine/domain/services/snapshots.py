"""Domain services for monthly snapshot rollups."""

from collections.abc import Iterable
from decimal import Decimal
from logging import Logger

from ledger_engine.domain.constants import bucket_for
from ledger_engine.domain.models import (
    Account,
    AccountBucket,
    AccountSnapshot,
    MonthlySnapshot,
    SnapshotHistoryEntry,
)
from ledger_engine.domain.services.validation import validate_balance_sign
from ledger_engine.utils.decimal_utils import percent_of


def compute_monthly_snapshot(
    accounts: Iterable[Account],
    *,
    year: int,
    month: int,
    snapshot_date: int,
    monthly_income: Decimal,
    monthly_expense: Decimal,
    logger: Logger,
) -> MonthlySnapshot:
    """Compute every snapshot figure from accounts and month totals.

    Args:
        accounts: Accounts to roll up; inactive ones are skipped.
        year: Snapshot year.
        month: Snapshot month (1-12).
        snapshot_date: Capture time, epoch milliseconds.
        monthly_income: Income transactions within the month.
        monthly_expense: Expense transactions within the month.
        logger: Logger used for sign-convention warnings.

    Returns:
        MonthlySnapshot: Unsaved snapshot with all fields populated.
    """
    zero = Decimal("0")
    cash_assets = zero
    investment_assets = zero
    investment_principal = zero
    total_assets = zero
    total_liabilities = zero
    frozen: list[AccountSnapshot] = []

    for account in accounts:
        if not account.is_active:
            continue
        bucket = bucket_for(account.account_type)
        validate_balance_sign(account, bucket, logger)
        frozen.append(
            AccountSnapshot(
                account_id=account.id,
                name=account.name,
                account_type=account.account_type.value,
                balance=account.balance,
                initial_balance=account.initial_balance,
            )
        )
        if bucket is AccountBucket.LIABILITY:
            total_liabilities += abs(account.balance)
            continue
        if not account.include_in_total:
            continue
        total_assets += account.balance
        if bucket is AccountBucket.CASH:
            cash_assets += account.balance
        elif bucket is AccountBucket.INVESTMENT:
            investment_assets += account.balance
            investment_principal += account.initial_balance

    monthly_balance = monthly_income - monthly_expense
    return MonthlySnapshot(
        year=year,
        month=month,
        snapshot_date=snapshot_date,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        net_worth=total_assets - total_liabilities,
        cash_assets=cash_assets,
        investment_assets=investment_assets,
        investment_principal=investment_principal,
        investment_return=investment_assets - investment_principal,
        monthly_income=monthly_income,
        monthly_expense=monthly_expense,
        monthly_balance=monthly_balance,
        savings_rate=percent_of(monthly_balance, monthly_income),
        accounts=tuple(frozen),
        created_at=snapshot_date,
    )


def build_history(
    snapshots: list[MonthlySnapshot],
) -> list[SnapshotHistoryEntry]:
    """Pair each snapshot with its net-worth change versus the prior one.

    Args:
        snapshots: Snapshots in any order.

    Returns:
        list[SnapshotHistoryEntry]: Newest first; the oldest entry has no
        change.
    """
    ordered = sorted(snapshots, key=lambda item: (item.year, item.month))
    entries: list[SnapshotHistoryEntry] = []
    previous: MonthlySnapshot | None = None
    for snapshot in ordered:
        change = None
        if previous is not None:
            change = snapshot.net_worth - previous.net_worth
        entries.append(
            SnapshotHistoryEntry(snapshot=snapshot, net_worth_change=change)
        )
        previous = snapshot
    entries.reverse()
    return entries


__all__ = ["compute_monthly_snapshot", "build_history"]
