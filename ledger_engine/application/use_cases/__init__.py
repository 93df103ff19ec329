"""Use cases package."""

from .create_monthly_snapshot import CreateMonthlySnapshotUseCase
from .create_recurring_template import CreateRecurringTemplateUseCase
from .get_due_templates import (
    GetDueTemplatesUseCase,
    GetUpcomingTemplatesUseCase,
)
from .get_investment_summary import GetInvestmentSummaryUseCase
from .get_recurring_totals import GetRecurringTotalsUseCase
from .get_snapshot_history import GetSnapshotHistoryUseCase
from .manage_recurring import (
    MarkRecurringExecutedUseCase,
    RescheduleTemplateUseCase,
    SetRecurringActiveUseCase,
)
from .process_due_recurring import (
    ProcessDueRecurringUseCase,
    ProcessDueResult,
    RecurringFailure,
)
from .trade_positions import (
    BuyPositionUseCase,
    SellPositionUseCase,
    UpdatePositionPriceUseCase,
)

__all__ = [
    "BuyPositionUseCase",
    "CreateMonthlySnapshotUseCase",
    "CreateRecurringTemplateUseCase",
    "GetDueTemplatesUseCase",
    "GetInvestmentSummaryUseCase",
    "GetRecurringTotalsUseCase",
    "GetSnapshotHistoryUseCase",
    "GetUpcomingTemplatesUseCase",
    "MarkRecurringExecutedUseCase",
    "ProcessDueRecurringUseCase",
    "ProcessDueResult",
    "RecurringFailure",
    "RescheduleTemplateUseCase",
    "SellPositionUseCase",
    "SetRecurringActiveUseCase",
    "UpdatePositionPriceUseCase",
]
