"""Use cases applying buys, sells and price updates to positions."""

from dataclasses import replace
from decimal import Decimal

from ledger_engine.application.ports.clock import ClockPort
from ledger_engine.application.ports.positions_repository import (
    PositionsRepositoryPort,
)
from ledger_engine.domain.errors import (
    DuplicatePositionError,
    InsufficientQuantityError,
)
from ledger_engine.domain.models import HoldingType, InvestmentPosition
from ledger_engine.domain.services.positions import (
    SellOutcome,
    apply_sell,
    merge_buy,
    open_position,
    reprice,
)
from ledger_engine.domain.services.validation import (
    validate_price,
    validate_trade,
)
from ledger_engine.infrastructure.clock import SystemClock
from ledger_engine.infrastructure.logging.logger import get_app_logger
from ledger_engine.utils.decimal_utils import coerce_decimal


class BuyPositionUseCase:
    """Record a purchase, merging into an open position with the same code."""

    def __init__(
        self,
        positions_repo: PositionsRepositoryPort,
        clock: ClockPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            positions_repo: Port storing investment positions.
            clock: Optional clock; defaults to the system clock.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._positions_repo = positions_repo
        self._clock = clock or SystemClock()
        self._logger = logger or get_app_logger()

    def execute(
        self,
        account_id: int,
        name: str,
        code: str,
        holding_type: HoldingType,
        quantity: Decimal | str | int,
        price: Decimal | str | int,
        note: str = "",
        now_ms: int | None = None,
    ) -> InvestmentPosition:
        """Buy units of a holding.

        A non-empty code matching an open position in the same account adds
        to that position at weighted-average cost. An empty code always
        opens a new position.

        Args:
            account_id: Investment account holding the position.
            name: Display name for a new position.
            code: Security code; may be empty.
            holding_type: Kind of holding for a new position.
            quantity: Units bought, must be positive.
            price: Price per unit, must not be negative.
            note: Note for a new position.
            now_ms: Trade time, epoch milliseconds; defaults to now.

        Returns:
            InvestmentPosition: Stored position after the buy.

        Raises:
            ValueError: If quantity or price is out of range.
            StaleRecordError: If the merged position changed concurrently.
            DuplicatePositionError: If a concurrent buy opened the position
                and it was sold again before this buy could merge.
        """
        units = coerce_decimal(quantity)
        unit_price = coerce_decimal(price)
        validate_trade(units, unit_price)
        now = self._clock.now_millis() if now_ms is None else now_ms
        code = (code or "").strip()

        existing = None
        if code:
            existing = self._positions_repo.find_open_position(
                account_id, code
            )
        if existing is not None:
            return self._merge(existing, units, unit_price, now)

        try:
            saved = self._positions_repo.insert_position(
                open_position(
                    account_id=account_id,
                    name=name,
                    code=code,
                    holding_type=HoldingType(holding_type),
                    quantity=units,
                    price=unit_price,
                    note=note,
                    now_ms=now,
                )
            )
        except DuplicatePositionError:
            existing = self._positions_repo.find_open_position(
                account_id, code
            )
            if existing is None:
                raise
            self._logger.info(
                f"Position {code!r} was opened concurrently in account "
                f"id={account_id}; merging instead"
            )
            return self._merge(existing, units, unit_price, now)
        self._logger.info(
            f"Opened position id={saved.id} ({saved.name}) with "
            f"{units} @ {unit_price}"
        )
        return saved

    def _merge(
        self,
        existing: InvestmentPosition,
        units: Decimal,
        unit_price: Decimal,
        now: int,
    ) -> InvestmentPosition:
        saved = self._positions_repo.update_position(
            merge_buy(existing, units, unit_price, now)
        )
        self._logger.info(
            f"Merged buy of {units} @ {unit_price} into position "
            f"id={saved.id}; quantity={saved.quantity}, "
            f"cost={saved.cost_price}"
        )
        return saved


class SellPositionUseCase:
    """Record a sale, releasing cost basis at the weighted-average cost."""

    def __init__(
        self,
        positions_repo: PositionsRepositoryPort,
        clock: ClockPort | None = None,
        logger=None,
        strict_oversell: bool = False,
    ) -> None:
        """Initialize the use case.

        Args:
            positions_repo: Port storing investment positions.
            clock: Optional clock; defaults to the system clock.
            logger: Optional logger compatible with logging.Logger-like API.
            strict_oversell: Reject sells larger than the held quantity
                instead of liquidating the position.
        """
        self._positions_repo = positions_repo
        self._clock = clock or SystemClock()
        self._logger = logger or get_app_logger()
        self._strict_oversell = strict_oversell

    def execute(
        self,
        position_id: int,
        quantity: Decimal | str | int,
        price: Decimal | str | int,
        now_ms: int | None = None,
    ) -> SellOutcome | None:
        """Sell units of a position.

        Args:
            position_id: Position to sell from.
            quantity: Units sold, must be positive.
            price: Sale price per unit, must not be negative.
            now_ms: Trade time, epoch milliseconds; defaults to now.

        Returns:
            SellOutcome | None: Stored position and sale details, or None
            when the position is unknown or already sold.

        Raises:
            ValueError: If quantity or price is out of range.
            InsufficientQuantityError: In strict mode, when selling more
                than is held.
            StaleRecordError: If the position changed concurrently.
        """
        units = coerce_decimal(quantity)
        unit_price = coerce_decimal(price)
        validate_trade(units, unit_price)

        position = self._positions_repo.get_position(position_id)
        if position is None:
            self._logger.warning(
                f"Position id={position_id} not found; sell ignored"
            )
            return None
        if position.is_sold:
            self._logger.warning(
                f"Position id={position_id} already sold; sell ignored"
            )
            return None
        if self._strict_oversell and units > position.quantity:
            raise InsufficientQuantityError(
                position_id, position.quantity, units
            )

        now = self._clock.now_millis() if now_ms is None else now_ms
        outcome = apply_sell(position, units, unit_price, now)
        if outcome.oversold_quantity > 0:
            self._logger.warning(
                f"Sell of {units} exceeds {position.quantity} held in "
                f"position id={position_id}; liquidating"
            )
        saved = self._positions_repo.update_position(outcome.position)
        state = "liquidated" if outcome.liquidated else "reduced"
        self._logger.info(
            f"Position id={position_id} {state}: sold {units} @ "
            f"{unit_price}, realized={outcome.realized_profit_loss}"
        )
        return replace(outcome, position=saved)


class UpdatePositionPriceUseCase:
    """Revalue a position at a new market price."""

    def __init__(
        self,
        positions_repo: PositionsRepositoryPort,
        clock: ClockPort | None = None,
        logger=None,
    ) -> None:
        self._positions_repo = positions_repo
        self._clock = clock or SystemClock()
        self._logger = logger or get_app_logger()

    def execute(
        self,
        position_id: int,
        price: Decimal | str | int,
        now_ms: int | None = None,
    ) -> InvestmentPosition | None:
        unit_price = coerce_decimal(price)
        validate_price(unit_price)
        position = self._positions_repo.get_position(position_id)
        if position is None:
            self._logger.warning(
                f"Position id={position_id} not found; price ignored"
            )
            return None
        now = self._clock.now_millis() if now_ms is None else now_ms
        saved = self._positions_repo.update_position(
            reprice(position, unit_price, now)
        )
        self._logger.info(
            f"Position id={position_id} repriced to {unit_price}; "
            f"market value={saved.market_value}"
        )
        return saved


__all__ = [
    "BuyPositionUseCase",
    "SellPositionUseCase",
    "UpdatePositionPriceUseCase",
]
