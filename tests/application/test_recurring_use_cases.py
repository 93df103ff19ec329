"""Tests for the recurring scheduler use cases."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from ledger_engine.application.use_cases.create_recurring_template import (
    CreateRecurringTemplateUseCase,
)
from ledger_engine.application.use_cases.get_due_templates import (
    GetDueTemplatesUseCase,
    GetUpcomingTemplatesUseCase,
)
from ledger_engine.application.use_cases.get_recurring_totals import (
    GetRecurringTotalsUseCase,
)
from ledger_engine.application.use_cases.manage_recurring import (
    MarkRecurringExecutedUseCase,
    RescheduleTemplateUseCase,
    SetRecurringActiveUseCase,
)
from ledger_engine.application.use_cases.process_due_recurring import (
    ProcessDueRecurringUseCase,
)
from ledger_engine.domain.errors import StaleRecordError
from ledger_engine.domain.models import (
    LedgerTransaction,
    RecurringFrequency,
    RecurringTemplate,
    TransactionType,
)


UTC = timezone.utc


def _ms(year, month, day, hour=0) -> int:
    return int(datetime(year, month, day, hour, tzinfo=UTC).timestamp() * 1000)


class FakeClock:
    """Clock returning a fixed instant."""

    def __init__(self, now_ms: int) -> None:
        self.now_ms = now_ms

    def now_millis(self) -> int:
        return self.now_ms


class FakeRecurringRepository:
    """In-memory recurring repository with version checks."""

    def __init__(self, templates=(), failing_ids=()) -> None:
        self.templates: dict[int, RecurringTemplate] = {}
        self.transactions: list[LedgerTransaction] = []
        self.failing_ids = set(failing_ids)
        for template in templates:
            self.templates[template.id] = template

    def list_active_templates(self):
        return [t for t in self.templates.values() if t.is_active]

    def get_template(self, template_id):
        return self.templates.get(template_id)

    def insert_template(self, template):
        saved = replace(template, id=len(self.templates) + 1)
        self.templates[saved.id] = saved
        return saved

    def update_schedule(self, template):
        stored = self.templates[template.id]
        if stored.version != template.version:
            raise StaleRecordError(
                "recurring_transactions", template.id, template.version
            )
        saved = replace(template, version=template.version + 1)
        self.templates[template.id] = saved
        return saved

    def set_active(self, template_id, is_active, now_ms):
        if template_id not in self.templates:
            return False
        self.templates[template_id] = replace(
            self.templates[template_id],
            is_active=is_active,
            updated_at=now_ms,
        )
        return True

    def delete_template(self, template_id):
        return self.templates.pop(template_id, None) is not None

    def record_materialization(self, transaction, template):
        if template.id in self.failing_ids:
            raise RuntimeError("disk full")
        self.update_schedule(template)
        saved = replace(transaction, id=len(self.transactions) + 100)
        self.transactions.append(saved)
        return saved

    def sum_active_amounts(self, transaction_type):
        return sum(
            (
                t.amount
                for t in self.list_active_templates()
                if t.transaction_type is transaction_type
            ),
            Decimal("0"),
        )


def _template(template_id=1, **overrides) -> RecurringTemplate:
    base = RecurringTemplate(
        id=template_id,
        name=f"Template {template_id}",
        amount=Decimal("100"),
        transaction_type=TransactionType.EXPENSE,
        category_id=1,
        account_id=1,
        frequency=RecurringFrequency.MONTHLY,
        day_of_period=31,
        start_date=_ms(2023, 1, 1),
        next_execution_date=_ms(2023, 1, 31),
    )
    return replace(base, **overrides)


def _process(repo, now_ms):
    use_case = ProcessDueRecurringUseCase(
        repo,
        clock=FakeClock(now_ms),
        logger=MagicMock(),
        tz=UTC,
    )
    return use_case.run()


def test_process_due_materializes_and_advances_with_clamp() -> None:
    """A Jan 31 template processed on Feb 1 moves to Feb 28."""
    repo = FakeRecurringRepository([_template()])
    now = _ms(2023, 2, 1, 8)

    result = _process(repo, now)

    assert result.processed_count == 1
    assert result.transaction_ids == (100,)
    assert result.failures == ()
    (transaction,) = repo.transactions
    assert transaction.date == now
    assert transaction.amount == Decimal("100")
    template = repo.templates[1]
    assert template.next_execution_date == _ms(2023, 2, 28)
    assert template.last_executed_date == now
    assert template.execution_count == 1


def test_process_due_twice_at_same_time_creates_nothing_new() -> None:
    repo = FakeRecurringRepository([_template()])
    now = _ms(2023, 2, 1, 8)

    _process(repo, now)
    second = _process(repo, now)

    assert second.processed_count == 0
    assert len(repo.transactions) == 1


def test_backlog_advances_one_period_per_run() -> None:
    repo = FakeRecurringRepository(
        [_template(next_execution_date=_ms(2023, 1, 31))]
    )
    now = _ms(2023, 5, 1)

    first = _process(repo, now)

    assert first.processed_count == 1
    assert repo.templates[1].next_execution_date == _ms(2023, 2, 28)

    _process(repo, now)
    _process(repo, now)

    assert len(repo.transactions) == 3
    assert repo.templates[1].next_execution_date == _ms(2023, 4, 30)


def test_failures_are_reported_without_aborting_batch() -> None:
    repo = FakeRecurringRepository(
        [_template(1), _template(2, name="Broken")],
        failing_ids={2},
    )
    logger = MagicMock()
    use_case = ProcessDueRecurringUseCase(
        repo, clock=FakeClock(_ms(2023, 2, 1)), logger=logger, tz=UTC
    )

    result = use_case.run()

    assert result.processed_count == 1
    assert len(result.failures) == 1
    failure = result.failures[0]
    assert failure.template_id == 2
    assert failure.name == "Broken"
    assert "disk full" in failure.error
    assert repo.templates[2].execution_count == 0
    logger.error.assert_called_once()


def test_process_due_skips_paused_reminder_only_and_ended() -> None:
    repo = FakeRecurringRepository(
        [
            _template(1, is_active=False),
            _template(2, auto_execute=False),
            _template(3, end_date=_ms(2023, 1, 15)),
            _template(4, next_execution_date=_ms(2023, 3, 1)),
        ]
    )

    result = _process(repo, _ms(2023, 2, 1))

    assert result.processed_count == 0
    assert repo.transactions == []


def test_explicit_now_overrides_clock() -> None:
    repo = FakeRecurringRepository([_template()])
    use_case = ProcessDueRecurringUseCase(
        repo, clock=FakeClock(_ms(2022, 1, 1)), logger=MagicMock(), tz=UTC
    )

    result = use_case.run(now_ms=_ms(2023, 2, 1))

    assert result.processed_count == 1


def test_get_due_templates_orders_by_next_date() -> None:
    repo = FakeRecurringRepository(
        [
            _template(1, next_execution_date=_ms(2023, 1, 20)),
            _template(2, next_execution_date=_ms(2023, 1, 10)),
            _template(3, next_execution_date=_ms(2023, 3, 1)),
        ]
    )
    use_case = GetDueTemplatesUseCase(
        repo, clock=FakeClock(_ms(2023, 2, 1)), logger=MagicMock()
    )

    due = use_case.execute()

    assert [template.id for template in due] == [2, 1]
    assert repo.transactions == []


def test_get_upcoming_templates_uses_horizon() -> None:
    repo = FakeRecurringRepository(
        [
            _template(
                1, next_execution_date=_ms(2023, 2, 3), remind_before=True
            ),
            _template(
                2, next_execution_date=_ms(2023, 2, 12), remind_before=True
            ),
            _template(
                3, next_execution_date=_ms(2023, 1, 31), remind_before=True
            ),
        ]
    )
    use_case = GetUpcomingTemplatesUseCase(
        repo,
        clock=FakeClock(_ms(2023, 2, 1)),
        logger=MagicMock(),
        horizon_days=7,
        tz=UTC,
    )

    assert [t.id for t in use_case.execute()] == [1]
    assert [t.id for t in use_case.execute(horizon_days=14)] == [1, 2]
    with pytest.raises(ValueError):
        use_case.execute(horizon_days=-1)


def test_get_upcoming_templates_skips_reminders_turned_off() -> None:
    repo = FakeRecurringRepository(
        [
            _template(
                1, next_execution_date=_ms(2023, 2, 2), remind_before=False
            ),
            _template(
                2, next_execution_date=_ms(2023, 2, 3), remind_before=True
            ),
        ]
    )
    use_case = GetUpcomingTemplatesUseCase(
        repo, clock=FakeClock(_ms(2023, 2, 1)), logger=MagicMock(), tz=UTC
    )

    assert [t.id for t in use_case.execute()] == [2]


def test_get_upcoming_templates_uses_each_lead_time_without_horizon() -> None:
    repo = FakeRecurringRepository(
        [
            _template(
                1,
                next_execution_date=_ms(2023, 2, 5),
                remind_before=True,
                remind_days_before=5,
            ),
            _template(
                2,
                next_execution_date=_ms(2023, 2, 5),
                remind_before=True,
                remind_days_before=1,
            ),
        ]
    )
    logger = MagicMock()
    use_case = GetUpcomingTemplatesUseCase(
        repo,
        clock=FakeClock(_ms(2023, 2, 1)),
        logger=logger,
        horizon_days=None,
        tz=UTC,
    )

    assert [t.id for t in use_case.execute()] == [1]
    logger.info.assert_called_with(
        "Found 1 recurring templates due within their own lead time"
    )


def test_mark_executed_advances_known_template() -> None:
    repo = FakeRecurringRepository([_template(execution_count=2)])
    use_case = MarkRecurringExecutedUseCase(
        repo, clock=FakeClock(_ms(2023, 1, 30)), logger=MagicMock(), tz=UTC
    )

    updated = use_case.execute(1)

    assert updated.next_execution_date == _ms(2023, 2, 28)
    assert updated.last_executed_date == _ms(2023, 1, 30)
    assert updated.execution_count == 3
    assert repo.templates[1].version == 1


def test_mark_executed_unknown_template_is_noop() -> None:
    logger = MagicMock()
    use_case = MarkRecurringExecutedUseCase(
        FakeRecurringRepository(), clock=FakeClock(0), logger=logger
    )

    assert use_case.execute(42) is None
    logger.warning.assert_called_once()


def test_set_active_keeps_next_execution_date() -> None:
    repo = FakeRecurringRepository([_template()])
    use_case = SetRecurringActiveUseCase(
        repo, clock=FakeClock(_ms(2023, 6, 1)), logger=MagicMock()
    )

    assert use_case.execute(1, False) is True
    assert repo.templates[1].is_active is False
    assert use_case.execute(1, True) is True
    assert repo.templates[1].next_execution_date == _ms(2023, 1, 31)
    assert use_case.execute(99, True) is False


def test_reschedule_moves_next_date_after_now() -> None:
    repo = FakeRecurringRepository([_template()])
    use_case = RescheduleTemplateUseCase(
        repo, clock=FakeClock(_ms(2023, 6, 10, 12)), logger=MagicMock(), tz=UTC
    )

    updated = use_case.execute(1)

    assert updated.next_execution_date == _ms(2023, 6, 30)
    assert use_case.execute(99) is None


def test_create_template_computes_first_execution() -> None:
    repo = FakeRecurringRepository()
    use_case = CreateRecurringTemplateUseCase(
        repo, clock=FakeClock(_ms(2024, 5, 15, 10)), logger=MagicMock(), tz=UTC
    )

    saved = use_case.execute(
        name="  Gym ",
        amount="39.90",
        transaction_type=TransactionType.EXPENSE,
        category_id=4,
        account_id=2,
        frequency=RecurringFrequency.MONTHLY,
        day_of_period=10,
    )

    assert saved.id == 1
    assert saved.name == "Gym"
    assert saved.amount == Decimal("39.90")
    assert saved.start_date == _ms(2024, 5, 15, 10)
    assert saved.next_execution_date == _ms(2024, 6, 10)
    assert repo.templates[1] == saved


def test_create_template_rejects_invalid_input() -> None:
    repo = FakeRecurringRepository()
    use_case = CreateRecurringTemplateUseCase(
        repo, clock=FakeClock(0), logger=MagicMock(), tz=UTC
    )

    with pytest.raises(ValueError):
        use_case.execute(
            name="Odd",
            amount="-5",
            transaction_type=TransactionType.EXPENSE,
            category_id=1,
            account_id=1,
            frequency=RecurringFrequency.DAILY,
        )
    assert repo.templates == {}


def test_recurring_totals_sum_active_templates() -> None:
    repo = FakeRecurringRepository(
        [
            _template(1, amount=Decimal("1500")),
            _template(2, amount=Decimal("80"), is_active=False),
            _template(
                3,
                amount=Decimal("4200"),
                transaction_type=TransactionType.INCOME,
            ),
        ]
    )

    totals = GetRecurringTotalsUseCase(repo, logger=MagicMock()).execute()

    assert totals.fixed_expense == Decimal("1500")
    assert totals.fixed_income == Decimal("4200")
    assert totals.net == Decimal("2700")
