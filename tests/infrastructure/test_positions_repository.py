"""Tests for the SQLAlchemy positions repository."""

from dataclasses import replace
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from ledger_engine.application.use_cases.trade_positions import (
    BuyPositionUseCase,
)
from ledger_engine.domain.errors import (
    DuplicatePositionError,
    StaleRecordError,
)
from ledger_engine.domain.models import HoldingType
from ledger_engine.domain.services.positions import (
    apply_sell,
    merge_buy,
    open_position,
)
from ledger_engine.infrastructure.positions_repository import (
    SqlAlchemyPositionsRepository,
)


NOW = 1_700_000_000_000


def _position(code="IDX", account_id=1, quantity="10", price="100"):
    return open_position(
        account_id=account_id,
        name="Index Fund",
        code=code,
        holding_type=HoldingType.FUND,
        quantity=Decimal(quantity),
        price=Decimal(price),
        note="core",
        now_ms=NOW,
    )


def _repo(ledger_db) -> SqlAlchemyPositionsRepository:
    return SqlAlchemyPositionsRepository(ledger_db, logger=MagicMock())


def test_insert_and_get_keep_exact_decimals(ledger_db) -> None:
    repo = _repo(ledger_db)

    saved = repo.insert_position(_position(quantity="3.3333", price="1.07"))
    loaded = repo.get_position(saved.id)

    assert loaded == saved
    assert loaded.principal == Decimal("3.566631")
    assert repo.get_position(12345) is None


def test_find_open_position_matches_account_and_code(ledger_db) -> None:
    repo = _repo(ledger_db)
    saved = repo.insert_position(_position())
    repo.insert_position(_position(account_id=2))

    found = repo.find_open_position(1, "IDX")

    assert found.id == saved.id
    assert repo.find_open_position(1, "OTHER") is None


def test_update_position_guards_version(ledger_db) -> None:
    repo = _repo(ledger_db)
    saved = repo.insert_position(_position())
    merged = merge_buy(saved, Decimal("10"), Decimal("200"), NOW + 1)

    stored = repo.update_position(merged)

    assert stored.version == 1
    assert repo.get_position(saved.id).cost_price == Decimal("150")
    with pytest.raises(StaleRecordError):
        repo.update_position(merged)


def test_sold_positions_leave_open_listings(ledger_db) -> None:
    repo = _repo(ledger_db)
    kept = repo.insert_position(_position(code="A"))
    sold = repo.insert_position(_position(code="B"))
    outcome = apply_sell(sold, Decimal("10"), Decimal("100"), NOW)
    repo.update_position(outcome.position)

    open_ids = [position.id for position in repo.list_open_positions()]

    assert open_ids == [kept.id]
    assert repo.get_position(sold.id).is_sold is True
    assert repo.find_open_position(1, "B") is None


def test_new_buy_after_liquidation_opens_fresh_position(ledger_db) -> None:
    repo = _repo(ledger_db)
    first = repo.insert_position(_position())
    repo.update_position(replace(first, is_sold=True))

    second = repo.insert_position(_position())

    assert second.id != first.id
    assert repo.find_open_position(1, "IDX").id == second.id


def test_second_open_position_with_same_code_is_rejected(ledger_db) -> None:
    repo = _repo(ledger_db)
    first = repo.insert_position(_position())

    with pytest.raises(DuplicatePositionError) as excinfo:
        repo.insert_position(_position(price="120"))

    assert excinfo.value.account_id == 1
    assert excinfo.value.code == "IDX"
    assert [p.id for p in repo.list_open_positions()] == [first.id]


def test_positions_without_code_may_repeat(ledger_db) -> None:
    repo = _repo(ledger_db)

    repo.insert_position(_position(code=""))
    repo.insert_position(_position(code=""))

    assert len(repo.list_open_positions()) == 2


class StaleLookupRepository(SqlAlchemyPositionsRepository):
    """Repository whose first lookup runs before a competing buy commits."""

    def __init__(self, db_port) -> None:
        super().__init__(db_port, logger=MagicMock())
        self.missed = False

    def find_open_position(self, account_id, code):
        if not self.missed:
            self.missed = True
            return None
        return super().find_open_position(account_id, code)


def test_interleaved_first_buys_share_one_position(ledger_db) -> None:
    buyers = [StaleLookupRepository(ledger_db) for _ in range(2)]

    for repo in buyers:
        BuyPositionUseCase(repo, logger=MagicMock()).execute(
            1, "Fund", "IDX", HoldingType.FUND, "10", "100", now_ms=NOW
        )

    open_positions = _repo(ledger_db).list_open_positions()
    assert len(open_positions) == 1
    assert open_positions[0].quantity == Decimal("20")
    assert open_positions[0].version == 1
