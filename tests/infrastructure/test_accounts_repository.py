"""Tests for the SQLAlchemy accounts repository."""

from decimal import Decimal

from sqlalchemy import insert

from ledger_engine.domain.models import AccountType
from ledger_engine.infrastructure.accounts_repository import (
    SqlAlchemyAccountsRepository,
)
from ledger_engine.infrastructure.schema import accounts_table


def test_fetch_active_accounts_maps_rows(ledger_db) -> None:
    with ledger_db.get_ledger_engine().begin() as conn:
        conn.execute(
            insert(accounts_table),
            [
                {
                    "name": "Bank",
                    "account_type": "BANK",
                    "balance": "1200.50",
                    "initial_balance": "1000",
                    "include_in_total": True,
                    "is_active": True,
                },
                {
                    "name": "Closed",
                    "account_type": "CASH",
                    "balance": "5",
                    "initial_balance": "0",
                    "include_in_total": True,
                    "is_active": False,
                },
                {
                    "name": "Huabei",
                    "account_type": "HUABEI",
                    "balance": "-80",
                    "initial_balance": "0",
                    "include_in_total": False,
                    "is_active": True,
                },
            ],
        )

    accounts = SqlAlchemyAccountsRepository(ledger_db).fetch_active_accounts()

    assert [account.name for account in accounts] == ["Bank", "Huabei"]
    bank, huabei = accounts
    assert bank.account_type is AccountType.BANK
    assert bank.balance == Decimal("1200.50")
    assert bank.initial_balance == Decimal("1000")
    assert huabei.include_in_total is False
    assert huabei.is_active is True
