"""Use cases listing recurring templates that need attention."""

from datetime import tzinfo

from ledger_engine.application.ports.clock import ClockPort
from ledger_engine.application.ports.recurring_repository import (
    RecurringRepositoryPort,
)
from ledger_engine.domain.constants import DEFAULT_REMINDER_HORIZON_DAYS
from ledger_engine.domain.models import RecurringTemplate
from ledger_engine.domain.services.recurring import (
    is_due_for_execution,
    is_due_for_reminder,
)
from ledger_engine.infrastructure.clock import SystemClock
from ledger_engine.infrastructure.logging.logger import get_app_logger


class GetDueTemplatesUseCase:
    """List templates whose next occurrence should be materialized."""

    def __init__(
        self,
        recurring_repo: RecurringRepositoryPort,
        clock: ClockPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            recurring_repo: Port providing recurring templates.
            clock: Optional clock; defaults to the system clock.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._recurring_repo = recurring_repo
        self._clock = clock or SystemClock()
        self._logger = logger or get_app_logger()

    def execute(self, now_ms: int | None = None) -> list[RecurringTemplate]:
        """Return active auto-executing templates due at or before now.

        Args:
            now_ms: Evaluation time, epoch milliseconds; defaults to now.

        Returns:
            list[RecurringTemplate]: Due templates, earliest first.
        """
        now = self._clock.now_millis() if now_ms is None else now_ms
        due = [
            template
            for template in self._recurring_repo.list_active_templates()
            if is_due_for_execution(template, now)
        ]
        due.sort(key=lambda item: item.next_execution_date)
        self._logger.info(f"Found {len(due)} recurring templates due")
        return due


class GetUpcomingTemplatesUseCase:
    """List templates coming due within a reminder horizon."""

    def __init__(
        self,
        recurring_repo: RecurringRepositoryPort,
        clock: ClockPort | None = None,
        logger=None,
        horizon_days: int | None = DEFAULT_REMINDER_HORIZON_DAYS,
        tz: tzinfo | None = None,
    ) -> None:
        self._recurring_repo = recurring_repo
        self._clock = clock or SystemClock()
        self._logger = logger or get_app_logger()
        self._horizon_days = horizon_days
        self._tz = tz

    def execute(
        self,
        now_ms: int | None = None,
        horizon_days: int | None = None,
    ) -> list[RecurringTemplate]:
        """Return reminder templates due in ``(now, now + horizon]``.

        Templates without ``remind_before`` are never listed. When neither
        the call nor the use case sets a horizon, each template's own
        ``remind_days_before`` is used.

        Args:
            now_ms: Evaluation time, epoch milliseconds; defaults to now.
            horizon_days: Look-ahead in days; defaults to the configured one.

        Returns:
            list[RecurringTemplate]: Upcoming templates, earliest first.
        """
        now = self._clock.now_millis() if now_ms is None else now_ms
        horizon = self._horizon_days if horizon_days is None else horizon_days
        if horizon is not None and horizon < 0:
            raise ValueError("Reminder horizon cannot be negative.")
        upcoming = [
            template
            for template in self._recurring_repo.list_active_templates()
            if is_due_for_reminder(template, now, horizon, self._tz)
        ]
        upcoming.sort(key=lambda item: item.next_execution_date)
        if horizon is None:
            window = "their own lead time"
        else:
            window = f"{horizon} days"
        self._logger.info(
            f"Found {len(upcoming)} recurring templates due within {window}"
        )
        return upcoming


__all__ = ["GetDueTemplatesUseCase", "GetUpcomingTemplatesUseCase"]
