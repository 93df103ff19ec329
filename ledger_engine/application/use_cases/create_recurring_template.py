"""Use case creating a recurring template."""

from dataclasses import replace
from datetime import tzinfo
from decimal import Decimal

from ledger_engine.application.ports.clock import ClockPort
from ledger_engine.application.ports.recurring_repository import (
    RecurringRepositoryPort,
)
from ledger_engine.domain.models import (
    RecurringFrequency,
    RecurringTemplate,
    TransactionType,
)
from ledger_engine.domain.services.calendar_math import first_execution_date
from ledger_engine.domain.services.validation import validate_template
from ledger_engine.infrastructure.clock import SystemClock
from ledger_engine.infrastructure.logging.logger import get_app_logger
from ledger_engine.utils.decimal_utils import coerce_decimal


class CreateRecurringTemplateUseCase:
    """Validate and store a new template with its first execution date."""

    def __init__(
        self,
        recurring_repo: RecurringRepositoryPort,
        clock: ClockPort | None = None,
        logger=None,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            recurring_repo: Port storing templates.
            clock: Optional clock; defaults to the system clock.
            logger: Optional logger compatible with logging.Logger-like API.
            tz: Calendar time zone; None means system local time.
        """
        self._recurring_repo = recurring_repo
        self._clock = clock or SystemClock()
        self._logger = logger or get_app_logger()
        self._tz = tz

    def execute(
        self,
        *,
        name: str,
        amount: Decimal | str | int,
        transaction_type: TransactionType,
        category_id: int,
        account_id: int,
        frequency: RecurringFrequency,
        day_of_period: int = 1,
        month: int = 1,
        note: str = "",
        end_date: int | None = None,
        auto_execute: bool = True,
        remind_before: bool = False,
        remind_days_before: int = 1,
        now_ms: int | None = None,
    ) -> RecurringTemplate:
        """Create a template.

        Args:
            name: Display name, copied into materialized notes.
            amount: Positive amount of each occurrence.
            transaction_type: Income or expense.
            category_id: Category of materialized transactions.
            account_id: Account of materialized transactions.
            frequency: Schedule period.
            day_of_period: Day of month, or ISO weekday for weekly schedules.
            month: Month for yearly schedules.
            note: Free text appended to materialized notes.
            end_date: Optional last valid date, epoch milliseconds.
            auto_execute: False for reminder-only templates.
            remind_before: Whether reminders are wanted.
            remind_days_before: Reminder lead time in days.
            now_ms: Creation time, epoch milliseconds; defaults to now.

        Returns:
            RecurringTemplate: Stored template with its id.

        Raises:
            ValueError: If a field is outside its allowed range.
        """
        now = self._clock.now_millis() if now_ms is None else now_ms
        frequency = RecurringFrequency(frequency)
        template = RecurringTemplate(
            name=name.strip(),
            amount=coerce_decimal(amount),
            transaction_type=TransactionType(transaction_type),
            category_id=category_id,
            account_id=account_id,
            frequency=frequency,
            start_date=now,
            next_execution_date=now,
            day_of_period=day_of_period,
            month=month,
            note=note,
            end_date=end_date,
            auto_execute=auto_execute,
            remind_before=remind_before,
            remind_days_before=remind_days_before,
            created_at=now,
            updated_at=now,
        )
        validate_template(template)
        template = replace(
            template,
            next_execution_date=first_execution_date(
                now, frequency, day_of_period, month, self._tz
            ),
        )
        saved = self._recurring_repo.insert_template(template)
        self._logger.info(
            f"Recurring template id={saved.id} ({saved.name}) created; "
            f"first run at {saved.next_execution_date}"
        )
        return saved


__all__ = ["CreateRecurringTemplateUseCase"]
