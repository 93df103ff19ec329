"""Port for monthly snapshot storage."""

from typing import Protocol

from ledger_engine.domain.models import MonthlySnapshot


class SnapshotsRepositoryPort(Protocol):
    """Port exposing monthly snapshots keyed by ``(year, month)``."""

    def get_by_year_month(
        self,
        year: int,
        month: int,
    ) -> MonthlySnapshot | None:
        """Return the snapshot of a month, if any."""

    def upsert(self, snapshot: MonthlySnapshot) -> MonthlySnapshot:
        """Insert the snapshot or overwrite the month's existing one.

        Returns:
            MonthlySnapshot: Stored snapshot with its id. An overwrite keeps
            the existing id.
        """

    def list_recent(self, limit: int) -> list[MonthlySnapshot]:
        """Return up to ``limit`` snapshots, newest month first."""


__all__ = ["SnapshotsRepositoryPort"]
