"""Domain models for recurring transaction templates."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from ledger_engine.domain.models.transactions import TransactionType


class RecurringFrequency(str, Enum):
    """How often a template produces an occurrence."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


@dataclass(frozen=True)
class RecurringTemplate:
    """Definition from which periodic ledger transactions are materialized.

    Attributes:
        name: Display name, also used in the materialized note.
        amount: Positive amount copied to each occurrence.
        transaction_type: EXPENSE or INCOME.
        category_id: Category copied to each occurrence.
        account_id: Account copied to each occurrence.
        frequency: Period between occurrences.
        day_of_period: Day of month (1-31) for monthly and yearly templates,
            ISO weekday (1=Monday..7=Sunday) for weekly ones.
        month: Month (1-12) used by yearly templates.
        start_date: Creation time of the schedule, epoch milliseconds.
        next_execution_date: Next occurrence, epoch milliseconds.
        end_date: Optional last day the template may fire.
        last_executed_date: Time of the last materialization.
        is_active: Soft-disable flag.
        auto_execute: False for reminder-only templates.
        remind_before: Whether the user asked for advance reminders.
        remind_days_before: Days of advance notice requested.
        execution_count: Number of occurrences materialized so far.
        version: Optimistic-concurrency counter, bumped on every write.
    """

    name: str
    amount: Decimal
    transaction_type: TransactionType
    category_id: int
    account_id: int
    frequency: RecurringFrequency
    start_date: int
    next_execution_date: int
    day_of_period: int = 1
    month: int = 1
    note: str = ""
    end_date: int | None = None
    last_executed_date: int | None = None
    is_active: bool = True
    auto_execute: bool = True
    remind_before: bool = False
    remind_days_before: int = 1
    execution_count: int = 0
    created_at: int | None = None
    updated_at: int | None = None
    version: int = 0
    id: int | None = None


@dataclass(frozen=True)
class RecurringTotals:
    """Sum of active template amounts by direction."""

    fixed_income: Decimal
    fixed_expense: Decimal

    @property
    def net(self) -> Decimal:
        """Return fixed income minus fixed expense."""
        return self.fixed_income - self.fixed_expense


__all__ = ["RecurringFrequency", "RecurringTemplate", "RecurringTotals"]
