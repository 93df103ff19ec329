"""Composition root for wiring infrastructure adapters."""

from ledger_engine.application.ports.accounts_repository import (
    AccountsRepositoryPort,
)
from ledger_engine.application.ports.database import DatabaseEnginePort
from ledger_engine.application.ports.positions_repository import (
    PositionsRepositoryPort,
)
from ledger_engine.application.ports.recurring_repository import (
    RecurringRepositoryPort,
)
from ledger_engine.application.ports.snapshots_repository import (
    SnapshotsRepositoryPort,
)
from ledger_engine.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from ledger_engine.application.use_cases.create_monthly_snapshot import (
    CreateMonthlySnapshotUseCase,
)
from ledger_engine.application.use_cases.get_due_templates import (
    GetUpcomingTemplatesUseCase,
)
from ledger_engine.application.use_cases.process_due_recurring import (
    ProcessDueRecurringUseCase,
)
from ledger_engine.application.use_cases.trade_positions import (
    SellPositionUseCase,
)
from ledger_engine.infrastructure.accounts_repository import (
    SqlAlchemyAccountsRepository,
)
from ledger_engine.infrastructure.clock import SystemClock
from ledger_engine.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from ledger_engine.infrastructure.logging.logger import get_app_logger
from ledger_engine.infrastructure.positions_repository import (
    SqlAlchemyPositionsRepository,
)
from ledger_engine.infrastructure.recurring_repository import (
    SqlAlchemyRecurringRepository,
)
from ledger_engine.infrastructure.settings import LedgerSettings
from ledger_engine.infrastructure.snapshots_repository import (
    SqlAlchemySnapshotsRepository,
)
from ledger_engine.infrastructure.transactions_repository import (
    SqlAlchemyTransactionsRepository,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_recurring_repository(
    db_port: DatabaseEnginePort | None = None,
) -> RecurringRepositoryPort:
    """Return the recurring template repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyRecurringRepository(resolved_db, logger=get_app_logger())


def build_transactions_repository(
    db_port: DatabaseEnginePort | None = None,
) -> TransactionsRepositoryPort:
    """Return the transaction ledger repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyTransactionsRepository(resolved_db)


def build_positions_repository(
    db_port: DatabaseEnginePort | None = None,
) -> PositionsRepositoryPort:
    """Return the investment positions repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyPositionsRepository(resolved_db, logger=get_app_logger())


def build_accounts_repository(
    db_port: DatabaseEnginePort | None = None,
) -> AccountsRepositoryPort:
    """Return the accounts repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyAccountsRepository(resolved_db)


def build_snapshots_repository(
    db_port: DatabaseEnginePort | None = None,
) -> SnapshotsRepositoryPort:
    """Return the monthly snapshots repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemySnapshotsRepository(resolved_db, logger=get_app_logger())


def build_process_due_recurring_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
    logger=None,
) -> ProcessDueRecurringUseCase:
    """Return the batch use case materializing due templates."""
    resolved_settings = settings or LedgerSettings.from_env()
    return ProcessDueRecurringUseCase(
        build_recurring_repository(db_port),
        clock=SystemClock(),
        logger=logger or get_app_logger(),
        tz=resolved_settings.timezone,
    )


def build_upcoming_templates_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
    logger=None,
) -> GetUpcomingTemplatesUseCase:
    """Return the reminder listing with the configured horizon."""
    resolved_settings = settings or LedgerSettings.from_env()
    return GetUpcomingTemplatesUseCase(
        build_recurring_repository(db_port),
        clock=SystemClock(),
        logger=logger or get_app_logger(),
        horizon_days=resolved_settings.reminder_days,
        tz=resolved_settings.timezone,
    )


def build_sell_position_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
    logger=None,
) -> SellPositionUseCase:
    """Return the sell use case honoring the over-sell policy."""
    resolved_settings = settings or LedgerSettings.from_env()
    return SellPositionUseCase(
        build_positions_repository(db_port),
        clock=SystemClock(),
        logger=logger or get_app_logger(),
        strict_oversell=resolved_settings.strict_oversell,
    )


def build_create_monthly_snapshot_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
    logger=None,
) -> CreateMonthlySnapshotUseCase:
    """Return the snapshot use case for the current month."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or LedgerSettings.from_env()
    return CreateMonthlySnapshotUseCase(
        build_accounts_repository(resolved_db),
        build_transactions_repository(resolved_db),
        build_snapshots_repository(resolved_db),
        clock=SystemClock(),
        logger=logger or get_app_logger(),
        tz=resolved_settings.timezone,
    )


__all__ = [
    "build_database_adapter",
    "build_recurring_repository",
    "build_transactions_repository",
    "build_positions_repository",
    "build_accounts_repository",
    "build_snapshots_repository",
    "build_process_due_recurring_use_case",
    "build_upcoming_templates_use_case",
    "build_sell_position_use_case",
    "build_create_monthly_snapshot_use_case",
]
