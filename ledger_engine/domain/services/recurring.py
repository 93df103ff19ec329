"""Domain services for recurring templates."""

from dataclasses import replace
from datetime import tzinfo

from ledger_engine.domain.constants import RECURRING_NOTE_PREFIX, RECURRING_TAG
from ledger_engine.domain.models import LedgerTransaction, RecurringTemplate
from ledger_engine.domain.services.calendar_math import (
    advance,
    first_execution_date,
    shift_days,
)


def has_ended(template: RecurringTemplate, now_ms: int) -> bool:
    """Return True when the template's end date lies before now."""
    return template.end_date is not None and template.end_date < now_ms


def is_due_for_execution(template: RecurringTemplate, now_ms: int) -> bool:
    """Return True when the template should be materialized now.

    Reminder-only templates (``auto_execute=False``) are never due here.
    """
    return (
        template.is_active
        and template.auto_execute
        and template.next_execution_date <= now_ms
        and not has_ended(template, now_ms)
    )


def is_due_for_reminder(
    template: RecurringTemplate,
    now_ms: int,
    horizon_days: int | None = None,
    tz: tzinfo | None = None,
) -> bool:
    """Return True when a reminder is wanted for the next occurrence.

    Only active templates with ``remind_before`` set qualify, and their next
    date must lie within ``(now, now + horizon]``.

    Args:
        template: Template to check.
        now_ms: Evaluation time, epoch milliseconds.
        horizon_days: Look-ahead in days; None uses the template's own
            ``remind_days_before``.
        tz: Calendar time zone; None means system local time.

    Returns:
        bool: True when the template should be listed as upcoming.
    """
    if horizon_days is None:
        horizon_days = template.remind_days_before
    horizon_ms = shift_days(now_ms, horizon_days, tz)
    return (
        template.is_active
        and template.remind_before
        and now_ms < template.next_execution_date <= horizon_ms
        and not has_ended(template, now_ms)
    )


def materialized_note(template: RecurringTemplate) -> str:
    """Return the note tagging a transaction with its originating template."""
    return f"{RECURRING_NOTE_PREFIX} {template.name}: {template.note}".strip()


def build_occurrence(
    template: RecurringTemplate,
    now_ms: int,
) -> LedgerTransaction:
    """Build the ledger transaction for one due occurrence.

    Args:
        template: Due template.
        now_ms: Materialization time, used as the transaction date.

    Returns:
        LedgerTransaction: Unsaved transaction copied from the template.
    """
    return LedgerTransaction(
        transaction_type=template.transaction_type,
        amount=template.amount,
        category_id=template.category_id,
        account_id=template.account_id,
        date=now_ms,
        note=materialized_note(template),
        tags=f"{RECURRING_TAG},{template.name}",
        created_at=now_ms,
    )


def next_occurrence(
    template: RecurringTemplate,
    tz: tzinfo | None = None,
) -> int:
    """Return the occurrence one period after the current next date."""
    return advance(
        template.next_execution_date,
        template.frequency,
        template.day_of_period,
        template.month,
        tz,
    )


def mark_executed(
    template: RecurringTemplate,
    now_ms: int,
    tz: tzinfo | None = None,
) -> RecurringTemplate:
    """Record one execution and advance the schedule by one period.

    The next date is derived from the current next date, not from now, so a
    late run does not shift the schedule.
    """
    return replace(
        template,
        next_execution_date=next_occurrence(template, tz),
        last_executed_date=now_ms,
        execution_count=template.execution_count + 1,
        updated_at=now_ms,
    )


def reschedule_from(
    template: RecurringTemplate,
    now_ms: int,
    tz: tzinfo | None = None,
) -> RecurringTemplate:
    """Move the next date to the first occurrence after now."""
    return replace(
        template,
        next_execution_date=first_execution_date(
            now_ms,
            template.frequency,
            template.day_of_period,
            template.month,
            tz,
        ),
        updated_at=now_ms,
    )


__all__ = [
    "has_ended",
    "is_due_for_execution",
    "is_due_for_reminder",
    "materialized_note",
    "build_occurrence",
    "next_occurrence",
    "mark_executed",
    "reschedule_from",
]
