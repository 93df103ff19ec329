"""Domain models for ledger accounts."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class AccountType(str, Enum):
    """Kinds of accounts a user can hold."""

    CASH = "CASH"
    BANK = "BANK"
    ALIPAY = "ALIPAY"
    WECHAT = "WECHAT"
    CREDIT_CARD = "CREDIT_CARD"
    HUABEI = "HUABEI"
    BAITIAO = "BAITIAO"
    LOAN = "LOAN"
    MORTGAGE = "MORTGAGE"
    CAR_LOAN = "CAR_LOAN"
    INVESTMENT_STOCK = "INVESTMENT_STOCK"
    INVESTMENT_FUND = "INVESTMENT_FUND"
    INVESTMENT_DEPOSIT = "INVESTMENT_DEPOSIT"


class AccountBucket(str, Enum):
    """Rollup bucket an account type contributes to in snapshots."""

    CASH = "CASH"
    INVESTMENT = "INVESTMENT"
    LIABILITY = "LIABILITY"


@dataclass(frozen=True)
class Account:
    """Read model of an account as supplied by the persistence layer.

    Attributes:
        id: Account identifier.
        name: Display name.
        account_type: Account type driving bucket assignment.
        balance: Current balance. Liability balances are stored signed.
        initial_balance: Opening balance, used as investment principal.
        include_in_total: Whether the balance counts toward total assets.
        is_active: Inactive accounts are excluded from snapshots.
    """

    id: int
    name: str
    account_type: AccountType
    balance: Decimal
    initial_balance: Decimal = Decimal("0")
    include_in_total: bool = True
    is_active: bool = True


@dataclass(frozen=True)
class AccountSnapshot:
    """Balance of one account frozen inside a monthly snapshot."""

    account_id: int
    name: str
    account_type: str
    balance: Decimal
    initial_balance: Decimal


__all__ = ["AccountType", "AccountBucket", "Account", "AccountSnapshot"]
