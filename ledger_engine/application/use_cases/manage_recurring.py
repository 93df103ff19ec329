"""Use cases changing the schedule state of a single template."""

from datetime import tzinfo

from ledger_engine.application.ports.clock import ClockPort
from ledger_engine.application.ports.recurring_repository import (
    RecurringRepositoryPort,
)
from ledger_engine.domain.models import RecurringTemplate
from ledger_engine.domain.services.recurring import (
    mark_executed,
    reschedule_from,
)
from ledger_engine.infrastructure.clock import SystemClock
from ledger_engine.infrastructure.logging.logger import get_app_logger


class MarkRecurringExecutedUseCase:
    """Record a manual execution of a template and advance it one period."""

    def __init__(
        self,
        recurring_repo: RecurringRepositoryPort,
        clock: ClockPort | None = None,
        logger=None,
        tz: tzinfo | None = None,
    ) -> None:
        self._recurring_repo = recurring_repo
        self._clock = clock or SystemClock()
        self._logger = logger or get_app_logger()
        self._tz = tz

    def execute(
        self,
        template_id: int,
        now_ms: int | None = None,
    ) -> RecurringTemplate | None:
        """Mark a template executed.

        Args:
            template_id: Template to update.
            now_ms: Execution time, epoch milliseconds; defaults to now.

        Returns:
            RecurringTemplate | None: Updated template, or None when the id
            is unknown.
        """
        template = self._recurring_repo.get_template(template_id)
        if template is None:
            self._logger.warning(
                f"Recurring template id={template_id} not found; "
                "nothing marked"
            )
            return None
        now = self._clock.now_millis() if now_ms is None else now_ms
        saved = self._recurring_repo.update_schedule(
            mark_executed(template, now, self._tz)
        )
        self._logger.info(
            f"Recurring template id={template_id} marked executed; "
            f"next={saved.next_execution_date}"
        )
        return saved


class SetRecurringActiveUseCase:
    """Pause or resume a template without touching its schedule."""

    def __init__(
        self,
        recurring_repo: RecurringRepositoryPort,
        clock: ClockPort | None = None,
        logger=None,
    ) -> None:
        self._recurring_repo = recurring_repo
        self._clock = clock or SystemClock()
        self._logger = logger or get_app_logger()

    def execute(self, template_id: int, is_active: bool) -> bool:
        """Set the active flag.

        Returns:
            bool: False when the template does not exist.
        """
        changed = self._recurring_repo.set_active(
            template_id, is_active, self._clock.now_millis()
        )
        if not changed:
            self._logger.warning(
                f"Recurring template id={template_id} not found; "
                "active flag unchanged"
            )
            return False
        state = "resumed" if is_active else "paused"
        self._logger.info(f"Recurring template id={template_id} {state}")
        return True


class RescheduleTemplateUseCase:
    """Skip a template's backlog by restarting its schedule from now.

    Resumed templates keep their old next date, so processing would catch
    up one period per run. This moves the next date to the first
    occurrence after now instead.
    """

    def __init__(
        self,
        recurring_repo: RecurringRepositoryPort,
        clock: ClockPort | None = None,
        logger=None,
        tz: tzinfo | None = None,
    ) -> None:
        self._recurring_repo = recurring_repo
        self._clock = clock or SystemClock()
        self._logger = logger or get_app_logger()
        self._tz = tz

    def execute(
        self,
        template_id: int,
        now_ms: int | None = None,
    ) -> RecurringTemplate | None:
        template = self._recurring_repo.get_template(template_id)
        if template is None:
            self._logger.warning(
                f"Recurring template id={template_id} not found; "
                "nothing rescheduled"
            )
            return None
        now = self._clock.now_millis() if now_ms is None else now_ms
        saved = self._recurring_repo.update_schedule(
            reschedule_from(template, now, self._tz)
        )
        self._logger.info(
            f"Recurring template id={template_id} rescheduled from "
            f"{template.next_execution_date} to {saved.next_execution_date}"
        )
        return saved


__all__ = [
    "MarkRecurringExecutedUseCase",
    "SetRecurringActiveUseCase",
    "RescheduleTemplateUseCase",
]
