"""Tests for the SQLAlchemy transactions repository."""

from decimal import Decimal

from ledger_engine.domain.models import LedgerTransaction, TransactionType
from ledger_engine.infrastructure.transactions_repository import (
    SqlAlchemyTransactionsRepository,
)


def _transaction(kind, amount, date) -> LedgerTransaction:
    return LedgerTransaction(
        transaction_type=kind,
        amount=Decimal(amount),
        category_id=1,
        account_id=1,
        date=date,
        note="n",
        created_at=date,
    )


def test_insert_assigns_ids(ledger_db) -> None:
    repo = SqlAlchemyTransactionsRepository(ledger_db)

    first = repo.insert_transaction(
        _transaction(TransactionType.INCOME, "10", 100)
    )
    second = repo.insert_transaction(
        _transaction(TransactionType.INCOME, "10", 200)
    )

    assert first.id is not None
    assert second.id == first.id + 1


def test_sum_by_type_uses_half_open_range(ledger_db) -> None:
    repo = SqlAlchemyTransactionsRepository(ledger_db)
    for kind, amount, date in (
        (TransactionType.INCOME, "100.10", 999),
        (TransactionType.INCOME, "200.20", 1000),
        (TransactionType.INCOME, "300.30", 1999),
        (TransactionType.INCOME, "400.40", 2000),
        (TransactionType.EXPENSE, "50.05", 1500),
        (TransactionType.TRANSFER, "70", 1500),
    ):
        repo.insert_transaction(_transaction(kind, amount, date))

    income = repo.sum_by_type(TransactionType.INCOME, 1000, 2000)
    expense = repo.sum_by_type(TransactionType.EXPENSE, 1000, 2000)

    assert income == Decimal("500.50")
    assert expense == Decimal("50.05")
    assert repo.sum_by_type(TransactionType.EXPENSE, 0, 10) == Decimal("0")


def test_list_between_returns_domain_objects(ledger_db) -> None:
    repo = SqlAlchemyTransactionsRepository(ledger_db)
    repo.insert_transaction(_transaction(TransactionType.EXPENSE, "9.99", 50))
    repo.insert_transaction(_transaction(TransactionType.INCOME, "1", 5))

    rows = repo.list_between(0, 100)

    assert [row.date for row in rows] == [5, 50]
    assert rows[1].amount == Decimal("9.99")
    assert rows[1].transaction_type is TransactionType.EXPENSE
