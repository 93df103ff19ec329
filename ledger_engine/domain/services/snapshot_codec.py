"""Serialization of per-account balances stored inside snapshots.

Current documents look like ``{"version": 1, "accounts": [...]}`` with
decimals written as strings. Bare lists with camelCase keys, as written by
older releases, are still readable.
"""

import json

from ledger_engine.domain.models import AccountSnapshot
from ledger_engine.utils.decimal_utils import coerce_decimal


SNAPSHOT_FORMAT_VERSION = 1


def encode_account_snapshots(accounts: tuple[AccountSnapshot, ...]) -> str:
    """Serialize account balances to a versioned JSON document."""
    payload = {
        "version": SNAPSHOT_FORMAT_VERSION,
        "accounts": [
            {
                "account_id": account.account_id,
                "name": account.name,
                "account_type": account.account_type,
                "balance": str(account.balance),
                "initial_balance": str(account.initial_balance),
            }
            for account in accounts
        ],
    }
    return json.dumps(payload, ensure_ascii=False)


def decode_account_snapshots(blob: str | None) -> tuple[AccountSnapshot, ...]:
    """Parse account balances from a stored document.

    Args:
        blob: JSON text from storage; empty values yield no accounts.

    Returns:
        tuple[AccountSnapshot, ...]: Parsed balances.

    Raises:
        ValueError: If the document version is not supported.
    """
    if not blob:
        return ()
    payload = json.loads(blob)
    if isinstance(payload, list):
        return tuple(_decode_legacy(item) for item in payload)
    version = payload.get("version")
    if version != SNAPSHOT_FORMAT_VERSION:
        raise ValueError(f"Unsupported snapshot format version: {version}")
    return tuple(
        AccountSnapshot(
            account_id=int(item["account_id"]),
            name=item["name"],
            account_type=item["account_type"],
            balance=coerce_decimal(item["balance"]),
            initial_balance=coerce_decimal(item.get("initial_balance")),
        )
        for item in payload.get("accounts", [])
    )


def _decode_legacy(item: dict) -> AccountSnapshot:
    return AccountSnapshot(
        account_id=int(item["accountId"]),
        name=item["name"],
        account_type=item["type"],
        balance=coerce_decimal(item["balance"]),
        initial_balance=coerce_decimal(item.get("initialBalance")),
    )


__all__ = [
    "SNAPSHOT_FORMAT_VERSION",
    "encode_account_snapshots",
    "decode_account_snapshots",
]
