"""Use case materializing every due recurring template."""

from dataclasses import dataclass
from datetime import tzinfo

from ledger_engine.application.ports.clock import ClockPort
from ledger_engine.application.ports.recurring_repository import (
    RecurringRepositoryPort,
)
from ledger_engine.domain.models import RecurringTemplate
from ledger_engine.domain.services.recurring import (
    build_occurrence,
    is_due_for_execution,
    mark_executed,
)
from ledger_engine.infrastructure.clock import SystemClock
from ledger_engine.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class RecurringFailure:
    """A template that could not be materialized in a batch.

    Attributes:
        template_id: Identifier of the failing template.
        name: Template name.
        error: Error message raised while materializing it.
    """

    template_id: int | None
    name: str
    error: str


@dataclass(frozen=True)
class ProcessDueResult:
    """Outcome of one batch run.

    Attributes:
        processed_count: Number of transactions created.
        transaction_ids: Identifiers of the created transactions.
        failures: Templates skipped because of an error.
    """

    processed_count: int
    transaction_ids: tuple[int, ...] = ()
    failures: tuple[RecurringFailure, ...] = ()


class ProcessDueRecurringUseCase:
    """Create one transaction per due template and advance each template.

    A template due several periods in the past yields a single transaction
    per run; each run moves it forward by exactly one period.
    """

    def __init__(
        self,
        recurring_repo: RecurringRepositoryPort,
        clock: ClockPort | None = None,
        logger=None,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            recurring_repo: Port storing templates and their occurrences.
            clock: Optional clock; defaults to the system clock.
            logger: Optional logger compatible with logging.Logger-like API.
            tz: Calendar time zone; None means system local time.
        """
        self._recurring_repo = recurring_repo
        self._clock = clock or SystemClock()
        self._logger = logger or get_app_logger()
        self._tz = tz

    def run(self, now_ms: int | None = None) -> ProcessDueResult:
        """Materialize all templates due at ``now_ms``.

        Args:
            now_ms: Batch time, epoch milliseconds; defaults to now.

        Returns:
            ProcessDueResult: Created transaction ids and per-item failures.
        """
        now = self._clock.now_millis() if now_ms is None else now_ms
        due = [
            template
            for template in self._recurring_repo.list_active_templates()
            if is_due_for_execution(template, now)
        ]
        due.sort(key=lambda item: item.next_execution_date)
        self._logger.info(f"Processing {len(due)} due recurring templates")

        transaction_ids: list[int] = []
        failures: list[RecurringFailure] = []
        for template in due:
            try:
                transaction_ids.append(self._materialize(template, now))
            except Exception as exc:
                self._logger.error(
                    f"Failed to materialize recurring template "
                    f"id={template.id} ({template.name}): {exc}"
                )
                failures.append(
                    RecurringFailure(
                        template_id=template.id,
                        name=template.name,
                        error=str(exc),
                    )
                )

        self._logger.info(
            f"Recurring batch done: created={len(transaction_ids)}, "
            f"failed={len(failures)}"
        )
        return ProcessDueResult(
            processed_count=len(transaction_ids),
            transaction_ids=tuple(transaction_ids),
            failures=tuple(failures),
        )

    def _materialize(self, template: RecurringTemplate, now: int) -> int:
        transaction = build_occurrence(template, now)
        advanced = mark_executed(template, now, self._tz)
        saved = self._recurring_repo.record_materialization(
            transaction, advanced
        )
        self._logger.debug(
            f"Template id={template.id} materialized as transaction "
            f"id={saved.id}; next={advanced.next_execution_date}"
        )
        return saved.id


__all__ = [
    "RecurringFailure",
    "ProcessDueResult",
    "ProcessDueRecurringUseCase",
]
