"""SQLAlchemy-backed repository for investment positions."""

from dataclasses import replace

from sqlalchemy import insert, text
from sqlalchemy.exc import IntegrityError

from ledger_engine.application.ports.database import DatabaseEnginePort
from ledger_engine.application.ports.positions_repository import (
    PositionsRepositoryPort,
)
from ledger_engine.domain.errors import (
    DuplicatePositionError,
    StaleRecordError,
)
from ledger_engine.domain.models import HoldingType, InvestmentPosition
from ledger_engine.infrastructure.logging.logger import get_app_logger
from ledger_engine.infrastructure.schema import holdings_table
from ledger_engine.utils.decimal_utils import coerce_decimal


_POSITION_COLUMNS = """
    id, account_id, name, code, holding_type, quantity, cost_price,
    current_price, principal, market_value, profit_loss, return_rate,
    first_buy_date, last_update_date, note, is_sold, version
"""


def _row_to_position(row) -> InvestmentPosition:
    return InvestmentPosition(
        id=row.id,
        account_id=row.account_id,
        name=row.name,
        code=row.code or "",
        holding_type=HoldingType(row.holding_type),
        quantity=coerce_decimal(row.quantity),
        cost_price=coerce_decimal(row.cost_price),
        current_price=coerce_decimal(row.current_price),
        principal=coerce_decimal(row.principal),
        market_value=coerce_decimal(row.market_value),
        profit_loss=coerce_decimal(row.profit_loss),
        return_rate=coerce_decimal(row.return_rate),
        first_buy_date=row.first_buy_date,
        last_update_date=row.last_update_date,
        note=row.note or "",
        is_sold=bool(row.is_sold),
        version=row.version,
    )


def _valuation_params(position: InvestmentPosition) -> dict:
    return {
        "quantity": str(position.quantity),
        "cost_price": str(position.cost_price),
        "current_price": str(position.current_price),
        "principal": str(position.principal),
        "market_value": str(position.market_value),
        "profit_loss": str(position.profit_loss),
        "return_rate": str(position.return_rate),
        "last_update_date": position.last_update_date,
        "is_sold": position.is_sold,
    }


class SqlAlchemyPositionsRepository(PositionsRepositoryPort):
    """Repository backed by SQLAlchemy for investment positions."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def get_position(self, position_id: int) -> InvestmentPosition | None:
        query = text(
            f"""
            SELECT {_POSITION_COLUMNS}
            FROM investment_holdings
            WHERE id = :id
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            row = conn.execute(query, {"id": position_id}).first()
        return _row_to_position(row) if row is not None else None

    def find_open_position(
        self,
        account_id: int,
        code: str,
    ) -> InvestmentPosition | None:
        query = text(
            f"""
            SELECT {_POSITION_COLUMNS}
            FROM investment_holdings
            WHERE account_id = :account_id
              AND code = :code
              AND is_sold = :is_sold
            ORDER BY id
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            row = conn.execute(
                query,
                {"account_id": account_id, "code": code, "is_sold": False},
            ).first()
        return _row_to_position(row) if row is not None else None

    def list_open_positions(self) -> list[InvestmentPosition]:
        query = text(
            f"""
            SELECT {_POSITION_COLUMNS}
            FROM investment_holdings
            WHERE is_sold = :is_sold
            ORDER BY id
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, {"is_sold": False}).all()
        return [_row_to_position(row) for row in rows]

    def insert_position(
        self,
        position: InvestmentPosition,
    ) -> InvestmentPosition:
        """Store a new position and return it with its id.

        Raises:
            DuplicatePositionError: If another open position with the same
                account and non-empty code was stored first.
        """
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                result = conn.execute(
                    insert(holdings_table).values(
                        account_id=position.account_id,
                        name=position.name,
                        code=position.code,
                        holding_type=position.holding_type.value,
                        first_buy_date=position.first_buy_date,
                        note=position.note,
                        version=position.version,
                        **_valuation_params(position),
                    )
                )
                new_id = result.inserted_primary_key[0]
        except IntegrityError as exc:
            self._logger.warning(
                f"Open position {position.code!r} already exists in "
                f"account id={position.account_id}; insert rejected"
            )
            raise DuplicatePositionError(
                position.account_id, position.code
            ) from exc
        return replace(position, id=new_id)

    def update_position(
        self,
        position: InvestmentPosition,
    ) -> InvestmentPosition:
        """Persist valuation fields if the stored version still matches.

        Raises:
            StaleRecordError: If the stored version differs from
                ``position.version``.
        """
        query = text(
            """
            UPDATE investment_holdings
            SET quantity = :quantity,
                cost_price = :cost_price,
                current_price = :current_price,
                principal = :principal,
                market_value = :market_value,
                profit_loss = :profit_loss,
                return_rate = :return_rate,
                last_update_date = :last_update_date,
                is_sold = :is_sold,
                version = version + 1
            WHERE id = :id AND version = :version
            """
        )
        params = _valuation_params(position)
        params.update({"id": position.id, "version": position.version})
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(query, params)
        if result.rowcount == 0:
            self._logger.warning(
                f"Position id={position.id} changed since version "
                f"{position.version}; update rejected"
            )
            raise StaleRecordError(
                "investment_holdings", position.id, position.version
            )
        return replace(position, version=position.version + 1)


__all__ = ["SqlAlchemyPositionsRepository"]
