"""SQLAlchemy-backed repository for monthly snapshots."""

from dataclasses import replace

from sqlalchemy import text

from ledger_engine.application.ports.database import DatabaseEnginePort
from ledger_engine.application.ports.snapshots_repository import (
    SnapshotsRepositoryPort,
)
from ledger_engine.domain.models import MonthlySnapshot
from ledger_engine.domain.services.snapshot_codec import (
    decode_account_snapshots,
    encode_account_snapshots,
)
from ledger_engine.infrastructure.logging.logger import get_app_logger
from ledger_engine.utils.decimal_utils import coerce_decimal


_SNAPSHOT_COLUMNS = """
    id, year, month, snapshot_date, total_assets, total_liabilities,
    net_worth, cash_assets, investment_assets, investment_principal,
    investment_return, monthly_income, monthly_expense, monthly_balance,
    savings_rate, accounts_json, created_at
"""

_MONEY_FIELDS = (
    "total_assets",
    "total_liabilities",
    "net_worth",
    "cash_assets",
    "investment_assets",
    "investment_principal",
    "investment_return",
    "monthly_income",
    "monthly_expense",
    "monthly_balance",
    "savings_rate",
)

_WRITE_COLUMNS = (
    "year",
    "month",
    "snapshot_date",
    *_MONEY_FIELDS,
    "accounts_json",
    "created_at",
)

_UPSERT_SQL = """
    INSERT INTO monthly_snapshots ({columns})
    VALUES ({values})
    ON CONFLICT (year, month) DO UPDATE
    SET {assignments}
""".format(
    columns=", ".join(_WRITE_COLUMNS),
    values=", ".join(":" + name for name in _WRITE_COLUMNS),
    assignments=", ".join(
        f"{name} = excluded.{name}" for name in _WRITE_COLUMNS[2:]
    ),
)


def _row_to_snapshot(row) -> MonthlySnapshot:
    money = {
        name: coerce_decimal(getattr(row, name)) for name in _MONEY_FIELDS
    }
    return MonthlySnapshot(
        id=row.id,
        year=row.year,
        month=row.month,
        snapshot_date=row.snapshot_date,
        accounts=decode_account_snapshots(row.accounts_json),
        created_at=row.created_at,
        **money,
    )


def _snapshot_params(snapshot: MonthlySnapshot) -> dict:
    params = {
        name: str(getattr(snapshot, name)) for name in _MONEY_FIELDS
    }
    params.update(
        {
            "year": snapshot.year,
            "month": snapshot.month,
            "snapshot_date": snapshot.snapshot_date,
            "accounts_json": encode_account_snapshots(snapshot.accounts),
            "created_at": snapshot.created_at,
        }
    )
    return params


class SqlAlchemySnapshotsRepository(SnapshotsRepositoryPort):
    """Repository backed by SQLAlchemy for monthly snapshots."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def get_by_year_month(
        self,
        year: int,
        month: int,
    ) -> MonthlySnapshot | None:
        query = text(
            f"""
            SELECT {_SNAPSHOT_COLUMNS}
            FROM monthly_snapshots
            WHERE year = :year AND month = :month
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            row = conn.execute(query, {"year": year, "month": month}).first()
        return _row_to_snapshot(row) if row is not None else None

    def upsert(self, snapshot: MonthlySnapshot) -> MonthlySnapshot:
        """Insert the snapshot or overwrite the month's existing one.

        The write is a single ``INSERT ... ON CONFLICT`` on ``(year, month)``,
        so concurrent runs for a new month both succeed and the last one
        wins.

        Args:
            snapshot: Fully computed snapshot.

        Returns:
            MonthlySnapshot: Stored snapshot; an overwrite keeps the
            existing id.
        """
        lookup = text(
            """
            SELECT id FROM monthly_snapshots
            WHERE year = :year AND month = :month
            """
        )
        month_key = {"year": snapshot.year, "month": snapshot.month}
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(text(_UPSERT_SQL), _snapshot_params(snapshot))
            snapshot_id = conn.execute(lookup, month_key).scalar_one()
        self._logger.debug(
            f"Snapshot {snapshot.year}-{snapshot.month:02d} stored "
            f"(id={snapshot_id})"
        )
        return replace(snapshot, id=snapshot_id)

    def list_recent(self, limit: int) -> list[MonthlySnapshot]:
        query = text(
            f"""
            SELECT {_SNAPSHOT_COLUMNS}
            FROM monthly_snapshots
            ORDER BY year DESC, month DESC
            LIMIT :limit
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, {"limit": limit}).all()
        return [_row_to_snapshot(row) for row in rows]


__all__ = ["SqlAlchemySnapshotsRepository"]
