"""Domain services for weighted-average cost positions."""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from decimal import Decimal

from ledger_engine.domain.models import (
    HoldingType,
    InvestmentPosition,
    InvestmentSummary,
)
from ledger_engine.utils.decimal_utils import percent_of


@dataclass(frozen=True)
class SellOutcome:
    """Result of applying a sell to a position.

    Attributes:
        position: Position after the sell.
        liquidated: True when the sell closed the position.
        oversold_quantity: Units requested beyond the held quantity.
        realized_profit_loss: Sale proceeds minus the cost basis released.
    """

    position: InvestmentPosition
    liquidated: bool
    oversold_quantity: Decimal
    realized_profit_loss: Decimal


def value_position(
    position: InvestmentPosition,
    *,
    quantity: Decimal,
    principal: Decimal,
    cost_price: Decimal,
    current_price: Decimal,
    updated_at: int | None,
) -> InvestmentPosition:
    """Return the position with every derived figure recomputed together.

    Args:
        position: Position to update.
        quantity: Units held.
        principal: Cost basis of the units held.
        cost_price: Weighted-average cost per unit.
        current_price: Latest market price per unit.
        updated_at: Time of the change, epoch milliseconds.

    Returns:
        InvestmentPosition: Position with consistent valuation fields.
    """
    market_value = quantity * current_price
    profit_loss = market_value - principal
    return replace(
        position,
        quantity=quantity,
        principal=principal,
        cost_price=cost_price,
        current_price=current_price,
        market_value=market_value,
        profit_loss=profit_loss,
        return_rate=percent_of(profit_loss, principal),
        last_update_date=updated_at,
    )


def open_position(
    *,
    account_id: int,
    name: str,
    code: str,
    holding_type: HoldingType,
    quantity: Decimal,
    price: Decimal,
    note: str,
    now_ms: int,
) -> InvestmentPosition:
    """Create a fresh position bought at a single price."""
    zero = Decimal("0")
    blank = InvestmentPosition(
        account_id=account_id,
        name=name,
        code=code,
        holding_type=holding_type,
        quantity=zero,
        cost_price=zero,
        current_price=zero,
        principal=zero,
        market_value=zero,
        profit_loss=zero,
        return_rate=zero,
        first_buy_date=now_ms,
        note=note,
    )
    return value_position(
        blank,
        quantity=quantity,
        principal=quantity * price,
        cost_price=price,
        current_price=price,
        updated_at=now_ms,
    )


def merge_buy(
    position: InvestmentPosition,
    quantity: Decimal,
    price: Decimal,
    now_ms: int,
) -> InvestmentPosition:
    """Add units to an open position at weighted-average cost.

    The cost price becomes total principal over total quantity. The current
    price is left untouched.
    """
    new_quantity = position.quantity + quantity
    new_principal = position.principal + quantity * price
    return value_position(
        position,
        quantity=new_quantity,
        principal=new_principal,
        cost_price=new_principal / new_quantity,
        current_price=position.current_price,
        updated_at=now_ms,
    )


def apply_sell(
    position: InvestmentPosition,
    quantity: Decimal,
    price: Decimal,
    now_ms: int,
) -> SellOutcome:
    """Remove units from a position, releasing cost basis at average cost.

    Selling the whole holding, or more, marks the position sold and leaves
    its last figures in place.

    Args:
        position: Open position.
        quantity: Units sold.
        price: Sale price per unit; only used for the realized result.
        now_ms: Time of the sale, epoch milliseconds.

    Returns:
        SellOutcome: Updated position and sale details.
    """
    remaining = position.quantity - quantity
    sold_units = min(quantity, position.quantity)
    realized = sold_units * (price - position.cost_price)
    if remaining <= 0:
        return SellOutcome(
            position=replace(position, is_sold=True, last_update_date=now_ms),
            liquidated=True,
            oversold_quantity=-remaining,
            realized_profit_loss=realized,
        )
    sold_principal = quantity * position.cost_price
    updated = value_position(
        position,
        quantity=remaining,
        principal=position.principal - sold_principal,
        cost_price=position.cost_price,
        current_price=position.current_price,
        updated_at=now_ms,
    )
    return SellOutcome(
        position=updated,
        liquidated=False,
        oversold_quantity=Decimal("0"),
        realized_profit_loss=realized,
    )


def reprice(
    position: InvestmentPosition,
    price: Decimal,
    now_ms: int,
) -> InvestmentPosition:
    """Set a new market price; principal and cost are unchanged."""
    return value_position(
        position,
        quantity=position.quantity,
        principal=position.principal,
        cost_price=position.cost_price,
        current_price=price,
        updated_at=now_ms,
    )


def summarize_positions(
    positions: Iterable[InvestmentPosition],
) -> InvestmentSummary:
    """Aggregate open positions.

    Args:
        positions: Positions to aggregate; sold ones are ignored.

    Returns:
        InvestmentSummary: Totals, blended return rate, and counts of
        profitable and losing positions. Break-even positions count as
        neither.
    """
    zero = Decimal("0")
    total_principal = zero
    total_market_value = zero
    total_profit_loss = zero
    profitable = 0
    losing = 0
    count = 0
    by_type: dict[HoldingType, Decimal] = {}
    for position in positions:
        if position.is_sold:
            continue
        count += 1
        total_principal += position.principal
        total_market_value += position.market_value
        total_profit_loss += position.profit_loss
        if position.profit_loss > 0:
            profitable += 1
        elif position.profit_loss < 0:
            losing += 1
        by_type[position.holding_type] = (
            by_type.get(position.holding_type, zero) + position.market_value
        )
    return InvestmentSummary(
        total_principal=total_principal,
        total_market_value=total_market_value,
        total_profit_loss=total_profit_loss,
        return_rate=percent_of(total_profit_loss, total_principal),
        holding_count=count,
        profitable_count=profitable,
        loss_count=losing,
        market_value_by_type=by_type,
    )


__all__ = [
    "SellOutcome",
    "value_position",
    "open_position",
    "merge_buy",
    "apply_sell",
    "reprice",
    "summarize_positions",
]
