"""Port for investment position storage."""

from typing import Protocol

from ledger_engine.domain.models import InvestmentPosition


class PositionsRepositoryPort(Protocol):
    """Port exposing read and write access to investment positions."""

    def get_position(self, position_id: int) -> InvestmentPosition | None:
        """Return a position by id, or None when it does not exist."""

    def find_open_position(
        self,
        account_id: int,
        code: str,
    ) -> InvestmentPosition | None:
        """Return the unsold position with this code in this account."""

    def list_open_positions(self) -> list[InvestmentPosition]:
        """Return every position not marked sold."""

    def insert_position(
        self,
        position: InvestmentPosition,
    ) -> InvestmentPosition:
        """Store a new position and return it with its id.

        Raises:
            DuplicatePositionError: If an open position with the same
                account and non-empty code already exists.
        """

    def update_position(
        self,
        position: InvestmentPosition,
    ) -> InvestmentPosition:
        """Persist a changed position if nobody changed it meanwhile.

        Raises:
            StaleRecordError: If the stored version differs from
                ``position.version``.
        """


__all__ = ["PositionsRepositoryPort"]
