"""Domain models for investment positions."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class HoldingType(str, Enum):
    """Kind of instrument held in a position."""

    STOCK = "STOCK"
    FUND = "FUND"
    BOND = "BOND"
    DEPOSIT = "DEPOSIT"
    MONEY_FUND = "MONEY_FUND"
    FINANCIAL_PRODUCT = "FINANCIAL_PRODUCT"
    OTHER = "OTHER"


@dataclass(frozen=True)
class InvestmentPosition:
    """A holding valued at weighted-average cost.

    ``principal``, ``market_value``, ``profit_loss`` and ``return_rate`` are
    derived from ``quantity``, ``cost_price`` and ``current_price`` and are
    only ever produced by ``value_position``.
    """

    account_id: int
    name: str
    holding_type: HoldingType
    quantity: Decimal
    cost_price: Decimal
    current_price: Decimal
    principal: Decimal
    market_value: Decimal
    profit_loss: Decimal
    return_rate: Decimal
    first_buy_date: int
    code: str = ""
    note: str = ""
    last_update_date: int | None = None
    is_sold: bool = False
    version: int = 0
    id: int | None = None


@dataclass(frozen=True)
class InvestmentSummary:
    """Aggregate figures over all open positions."""

    total_principal: Decimal
    total_market_value: Decimal
    total_profit_loss: Decimal
    return_rate: Decimal
    holding_count: int
    profitable_count: int
    loss_count: int
    market_value_by_type: dict[HoldingType, Decimal] = field(
        default_factory=dict
    )


__all__ = ["HoldingType", "InvestmentPosition", "InvestmentSummary"]
