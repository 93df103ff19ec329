"""Domain constants for the ledger engine."""

from ledger_engine.domain.models.accounts import AccountBucket, AccountType


# Every AccountType must appear here; bucket_for() rejects anything else.
ACCOUNT_BUCKETS: dict[AccountType, AccountBucket] = {
    AccountType.CASH: AccountBucket.CASH,
    AccountType.BANK: AccountBucket.CASH,
    AccountType.ALIPAY: AccountBucket.CASH,
    AccountType.WECHAT: AccountBucket.CASH,
    AccountType.CREDIT_CARD: AccountBucket.LIABILITY,
    AccountType.HUABEI: AccountBucket.LIABILITY,
    AccountType.BAITIAO: AccountBucket.LIABILITY,
    AccountType.LOAN: AccountBucket.LIABILITY,
    AccountType.MORTGAGE: AccountBucket.LIABILITY,
    AccountType.CAR_LOAN: AccountBucket.LIABILITY,
    AccountType.INVESTMENT_STOCK: AccountBucket.INVESTMENT,
    AccountType.INVESTMENT_FUND: AccountBucket.INVESTMENT,
    AccountType.INVESTMENT_DEPOSIT: AccountBucket.INVESTMENT,
}

RECURRING_NOTE_PREFIX = "[recurring]"
RECURRING_TAG = "recurring"

DEFAULT_REMINDER_HORIZON_DAYS = 7
DEFAULT_HISTORY_LIMIT = 12


def bucket_for(account_type: AccountType) -> AccountBucket:
    """Return the snapshot bucket of an account type.

    Args:
        account_type: Account type to classify.

    Returns:
        AccountBucket: Bucket the type rolls up into.

    Raises:
        ValueError: If the type has no bucket assignment.
    """
    try:
        return ACCOUNT_BUCKETS[account_type]
    except KeyError:
        raise ValueError(
            f"No snapshot bucket assigned to account type {account_type!r}"
        ) from None


__all__ = [
    "ACCOUNT_BUCKETS",
    "RECURRING_NOTE_PREFIX",
    "RECURRING_TAG",
    "DEFAULT_REMINDER_HORIZON_DAYS",
    "DEFAULT_HISTORY_LIMIT",
    "bucket_for",
]
