"""Port for reading ledger accounts."""

from typing import Protocol

from ledger_engine.domain.models import Account


class AccountsRepositoryPort(Protocol):
    """Port exposing read access to accounts."""

    def fetch_active_accounts(self) -> list[Account]:
        """Return all active accounts."""


__all__ = ["AccountsRepositoryPort"]
