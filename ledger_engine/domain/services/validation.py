"""Domain validation helpers."""

from decimal import Decimal
from logging import Logger

from ledger_engine.domain.models import (
    Account,
    AccountBucket,
    RecurringFrequency,
    RecurringTemplate,
    TransactionType,
)


def validate_template(template: RecurringTemplate) -> None:
    """Reject recurring templates that cannot be scheduled.

    Args:
        template: Template about to be stored.

    Raises:
        ValueError: If a field is outside its allowed range.
    """
    if not template.name.strip():
        raise ValueError("Name cannot be empty.")
    if template.amount <= 0:
        raise ValueError("Amount must be positive.")
    if template.transaction_type not in (
        TransactionType.EXPENSE,
        TransactionType.INCOME,
    ):
        raise ValueError("Type must be income or expense.")
    if template.frequency is RecurringFrequency.WEEKLY:
        if not 1 <= template.day_of_period <= 7:
            raise ValueError("Weekday must be between 1 and 7.")
    elif not 1 <= template.day_of_period <= 31:
        raise ValueError("Day of month must be between 1 and 31.")
    if not 1 <= template.month <= 12:
        raise ValueError("Month must be between 1 and 12.")
    ends_early = (
        template.end_date is not None
        and template.end_date < template.start_date
    )
    if ends_early:
        raise ValueError("End date cannot precede the start date.")


def validate_trade(quantity: Decimal, price: Decimal) -> None:
    """Reject buy or sell requests with unusable figures.

    Raises:
        ValueError: If quantity is not positive or price is negative.
    """
    if quantity <= 0:
        raise ValueError("Quantity must be positive.")
    validate_price(price)


def validate_price(price: Decimal) -> None:
    """Reject negative prices."""
    if price < 0:
        raise ValueError("Price cannot be negative.")


def validate_balance_sign(
    account: Account,
    bucket: AccountBucket,
    logger: Logger,
) -> None:
    """Warn when balances violate expected sign conventions.

    Args:
        account: Account being rolled up.
        bucket: Bucket the account type belongs to.
        logger: Logger used for warnings.
    """
    if bucket is AccountBucket.LIABILITY and account.balance > 0:
        logger.warning(
            f"Liability balance is positive for account id={account.id}: "
            f"{account.balance}"
        )
    if bucket is not AccountBucket.LIABILITY and account.balance < 0:
        logger.warning(
            f"Asset balance is negative for account id={account.id}: "
            f"{account.balance}"
        )


__all__ = [
    "validate_template",
    "validate_trade",
    "validate_price",
    "validate_balance_sign",
]
