"""Tests for monthly snapshot rollups and history."""

from dataclasses import replace
from decimal import Decimal
import json
from unittest.mock import MagicMock

import pytest

from ledger_engine.domain.constants import ACCOUNT_BUCKETS, bucket_for
from ledger_engine.domain.models import (
    Account,
    AccountBucket,
    AccountSnapshot,
    AccountType,
)
from ledger_engine.domain.services.snapshot_codec import (
    decode_account_snapshots,
    encode_account_snapshots,
)
from ledger_engine.domain.services.snapshots import (
    build_history,
    compute_monthly_snapshot,
)


NOW = 1_717_000_000_000


def _accounts() -> list[Account]:
    return [
        Account(1, "Checking", AccountType.BANK, Decimal("1000")),
        Account(
            2,
            "Wallet",
            AccountType.ALIPAY,
            Decimal("500"),
            include_in_total=False,
        ),
        Account(
            3,
            "Fund",
            AccountType.INVESTMENT_FUND,
            Decimal("1200"),
            initial_balance=Decimal("1000"),
        ),
        Account(4, "Card", AccountType.CREDIT_CARD, Decimal("-300")),
        Account(5, "Car loan", AccountType.CAR_LOAN, Decimal("2000")),
        Account(
            6, "Old cash", AccountType.CASH, Decimal("999"), is_active=False
        ),
    ]


def _snapshot(logger=None, income="5000", expense="3000", month=5):
    return compute_monthly_snapshot(
        _accounts(),
        year=2024,
        month=month,
        snapshot_date=NOW,
        monthly_income=Decimal(income),
        monthly_expense=Decimal(expense),
        logger=logger or MagicMock(),
    )


def test_every_account_type_has_a_bucket() -> None:
    assert set(ACCOUNT_BUCKETS) == set(AccountType)
    assert bucket_for(AccountType.HUABEI) is AccountBucket.LIABILITY
    assert bucket_for(AccountType.WECHAT) is AccountBucket.CASH


def test_bucket_for_rejects_unknown_types() -> None:
    with pytest.raises(ValueError):
        bucket_for("CRYPTO")


def test_snapshot_rolls_up_buckets() -> None:
    snapshot = _snapshot()

    assert snapshot.total_assets == Decimal("2200")
    assert snapshot.cash_assets == Decimal("1000")
    assert snapshot.investment_assets == Decimal("1200")
    assert snapshot.investment_principal == Decimal("1000")
    assert snapshot.investment_return == Decimal("200")
    assert snapshot.total_liabilities == Decimal("2300")
    assert snapshot.net_worth == Decimal("-100")
    assert snapshot.monthly_balance == Decimal("2000")
    assert snapshot.savings_rate == Decimal("40")
    assert snapshot.snapshot_date == NOW
    assert (snapshot.year, snapshot.month) == (2024, 5)


def test_snapshot_freezes_active_accounts_only() -> None:
    snapshot = _snapshot()

    assert [item.account_id for item in snapshot.accounts] == [1, 2, 3, 4, 5]
    assert snapshot.accounts[3] == AccountSnapshot(
        account_id=4,
        name="Card",
        account_type="CREDIT_CARD",
        balance=Decimal("-300"),
        initial_balance=Decimal("0"),
    )


def test_snapshot_warns_on_positive_liability_balance() -> None:
    logger = MagicMock()

    _snapshot(logger=logger)

    logger.warning.assert_called_once()
    assert "id=5" in logger.warning.call_args[0][0]


def test_savings_rate_is_zero_without_income() -> None:
    snapshot = _snapshot(income="0", expense="250")

    assert snapshot.savings_rate == Decimal("0")
    assert snapshot.monthly_balance == Decimal("-250")


def test_history_is_newest_first_with_changes() -> None:
    march = replace(_snapshot(month=3), net_worth=Decimal("100"))
    april = replace(_snapshot(month=4), net_worth=Decimal("160"))
    may = replace(_snapshot(month=5), net_worth=Decimal("150"))

    entries = build_history([april, may, march])

    assert [entry.snapshot.month for entry in entries] == [5, 4, 3]
    assert [entry.net_worth_change for entry in entries] == [
        Decimal("-10"),
        Decimal("60"),
        None,
    ]


def test_account_snapshots_survive_encoding() -> None:
    accounts = _snapshot().accounts

    blob = encode_account_snapshots(accounts)

    assert json.loads(blob)["version"] == 1
    assert decode_account_snapshots(blob) == accounts


def test_decode_reads_legacy_lists() -> None:
    blob = json.dumps(
        [
            {
                "accountId": 9,
                "name": "Bank",
                "type": "BANK",
                "balance": 12.5,
                "initialBalance": 10,
            }
        ]
    )

    (account,) = decode_account_snapshots(blob)

    assert account.account_id == 9
    assert account.balance == Decimal("12.5")
    assert account.initial_balance == Decimal("10")


def test_decode_handles_empty_and_rejects_unknown_versions() -> None:
    assert decode_account_snapshots("") == ()
    assert decode_account_snapshots(None) == ()
    with pytest.raises(ValueError):
        decode_account_snapshots(json.dumps({"version": 99, "accounts": []}))
