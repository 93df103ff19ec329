"""SQLAlchemy-backed repository for recurring templates."""

from dataclasses import replace
from decimal import Decimal

from sqlalchemy import insert, text
from sqlalchemy.engine import Connection

from ledger_engine.application.ports.database import DatabaseEnginePort
from ledger_engine.application.ports.recurring_repository import (
    RecurringRepositoryPort,
)
from ledger_engine.domain.errors import StaleRecordError
from ledger_engine.domain.models import (
    LedgerTransaction,
    RecurringFrequency,
    RecurringTemplate,
    TransactionType,
)
from ledger_engine.infrastructure.logging.logger import get_app_logger
from ledger_engine.infrastructure.schema import recurring_table
from ledger_engine.infrastructure.transactions_repository import (
    insert_transaction_row,
)
from ledger_engine.utils.decimal_utils import coerce_decimal


_TEMPLATE_COLUMNS = """
    id, name, amount, transaction_type, category_id, account_id,
    frequency, day_of_period, month, note, start_date, end_date,
    next_execution_date, last_executed_date, is_active, auto_execute,
    remind_before, remind_days_before, execution_count, created_at,
    updated_at, version
"""


def _row_to_template(row) -> RecurringTemplate:
    return RecurringTemplate(
        id=row.id,
        name=row.name,
        amount=coerce_decimal(row.amount),
        transaction_type=TransactionType(row.transaction_type),
        category_id=row.category_id,
        account_id=row.account_id,
        frequency=RecurringFrequency(row.frequency),
        day_of_period=row.day_of_period,
        month=row.month,
        note=row.note or "",
        start_date=row.start_date,
        end_date=row.end_date,
        next_execution_date=row.next_execution_date,
        last_executed_date=row.last_executed_date,
        is_active=bool(row.is_active),
        auto_execute=bool(row.auto_execute),
        remind_before=bool(row.remind_before),
        remind_days_before=row.remind_days_before,
        execution_count=row.execution_count,
        created_at=row.created_at,
        updated_at=row.updated_at,
        version=row.version,
    )


class SqlAlchemyRecurringRepository(RecurringRepositoryPort):
    """Repository backed by SQLAlchemy for recurring templates.

    Schedule updates are guarded by the row version: an update only applies
    when the stored version still matches the one that was read, and bumps
    it by one.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def list_active_templates(self) -> list[RecurringTemplate]:
        query = text(
            f"""
            SELECT {_TEMPLATE_COLUMNS}
            FROM recurring_transactions
            WHERE is_active = :is_active
            ORDER BY next_execution_date, id
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, {"is_active": True}).all()
        return [_row_to_template(row) for row in rows]

    def get_template(self, template_id: int) -> RecurringTemplate | None:
        query = text(
            f"""
            SELECT {_TEMPLATE_COLUMNS}
            FROM recurring_transactions
            WHERE id = :id
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            row = conn.execute(query, {"id": template_id}).first()
        return _row_to_template(row) if row is not None else None

    def insert_template(
        self,
        template: RecurringTemplate,
    ) -> RecurringTemplate:
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(
                insert(recurring_table).values(
                    name=template.name,
                    amount=str(template.amount),
                    transaction_type=template.transaction_type.value,
                    category_id=template.category_id,
                    account_id=template.account_id,
                    frequency=template.frequency.value,
                    day_of_period=template.day_of_period,
                    month=template.month,
                    note=template.note,
                    start_date=template.start_date,
                    end_date=template.end_date,
                    next_execution_date=template.next_execution_date,
                    last_executed_date=template.last_executed_date,
                    is_active=template.is_active,
                    auto_execute=template.auto_execute,
                    remind_before=template.remind_before,
                    remind_days_before=template.remind_days_before,
                    execution_count=template.execution_count,
                    created_at=template.created_at,
                    updated_at=template.updated_at,
                    version=template.version,
                )
            )
            new_id = result.inserted_primary_key[0]
        return replace(template, id=new_id)

    def update_schedule(
        self,
        template: RecurringTemplate,
    ) -> RecurringTemplate:
        """Persist the schedule fields of a template.

        Raises:
            StaleRecordError: If the stored version differs from
                ``template.version``.
        """
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            self._guarded_update(conn, template)
        return replace(template, version=template.version + 1)

    def set_active(
        self,
        template_id: int,
        is_active: bool,
        now_ms: int,
    ) -> bool:
        query = text(
            """
            UPDATE recurring_transactions
            SET is_active = :is_active,
                updated_at = :updated_at,
                version = version + 1
            WHERE id = :id
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(
                query,
                {
                    "id": template_id,
                    "is_active": is_active,
                    "updated_at": now_ms,
                },
            )
        return result.rowcount > 0

    def delete_template(self, template_id: int) -> bool:
        query = text("DELETE FROM recurring_transactions WHERE id = :id")
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(query, {"id": template_id})
        return result.rowcount > 0

    def record_materialization(
        self,
        transaction: LedgerTransaction,
        template: RecurringTemplate,
    ) -> LedgerTransaction:
        """Insert an occurrence and advance its template in one transaction.

        Args:
            transaction: Occurrence to insert.
            template: Template already advanced, carrying the version that
                was read before advancing it.

        Returns:
            LedgerTransaction: Inserted transaction with its id.

        Raises:
            StaleRecordError: If another writer advanced the template first;
                the insert is rolled back.
        """
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            new_id = insert_transaction_row(conn, transaction)
            self._guarded_update(conn, template)
        return replace(transaction, id=new_id)

    def sum_active_amounts(self, transaction_type: TransactionType) -> Decimal:
        query = text(
            """
            SELECT amount
            FROM recurring_transactions
            WHERE is_active = :is_active
              AND transaction_type = :transaction_type
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                query,
                {
                    "is_active": True,
                    "transaction_type": TransactionType(
                        transaction_type
                    ).value,
                },
            ).all()
        return sum(
            (coerce_decimal(row.amount) for row in rows),
            Decimal("0"),
        )

    def _guarded_update(
        self,
        conn: Connection,
        template: RecurringTemplate,
    ) -> None:
        query = text(
            """
            UPDATE recurring_transactions
            SET next_execution_date = :next_execution_date,
                last_executed_date = :last_executed_date,
                execution_count = :execution_count,
                updated_at = :updated_at,
                version = version + 1
            WHERE id = :id AND version = :version
            """
        )
        result = conn.execute(
            query,
            {
                "id": template.id,
                "version": template.version,
                "next_execution_date": template.next_execution_date,
                "last_executed_date": template.last_executed_date,
                "execution_count": template.execution_count,
                "updated_at": template.updated_at,
            },
        )
        if result.rowcount == 0:
            self._logger.warning(
                f"Recurring template id={template.id} changed since "
                f"version {template.version}; update rejected"
            )
            raise StaleRecordError(
                "recurring_transactions", template.id, template.version
            )


__all__ = ["SqlAlchemyRecurringRepository"]
