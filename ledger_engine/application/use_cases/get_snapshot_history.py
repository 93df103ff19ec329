"""Use case listing recent monthly snapshots."""

from ledger_engine.application.ports.snapshots_repository import (
    SnapshotsRepositoryPort,
)
from ledger_engine.domain.constants import DEFAULT_HISTORY_LIMIT
from ledger_engine.domain.models import SnapshotHistoryEntry
from ledger_engine.domain.services.snapshots import build_history
from ledger_engine.infrastructure.logging.logger import get_app_logger


class GetSnapshotHistoryUseCase:
    """Return recent snapshots with month-over-month net-worth changes."""

    def __init__(self, snapshots_repo: SnapshotsRepositoryPort, logger=None):
        self._snapshots_repo = snapshots_repo
        self._logger = logger or get_app_logger()

    def execute(
        self,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[SnapshotHistoryEntry]:
        """Return up to ``limit`` entries, newest first.

        The oldest returned entry has no change unless an earlier month is
        stored, in which case one extra month is read to compute it.
        """
        if limit <= 0:
            raise ValueError("History limit must be positive.")
        snapshots = self._snapshots_repo.list_recent(limit + 1)
        entries = build_history(snapshots)[:limit]
        self._logger.info(f"Loaded {len(entries)} snapshot history entries")
        return entries


__all__ = ["GetSnapshotHistoryUseCase"]
