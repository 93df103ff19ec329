"""Port for recurring template storage."""

from decimal import Decimal
from typing import Protocol

from ledger_engine.domain.models import (
    LedgerTransaction,
    RecurringTemplate,
    TransactionType,
)


class RecurringRepositoryPort(Protocol):
    """Port exposing read and write access to recurring templates."""

    def list_active_templates(self) -> list[RecurringTemplate]:
        """Return all templates with ``is_active`` set."""

    def get_template(self, template_id: int) -> RecurringTemplate | None:
        """Return a template by id, or None when it does not exist."""

    def insert_template(
        self,
        template: RecurringTemplate,
    ) -> RecurringTemplate:
        """Store a new template and return it with its id."""

    def update_schedule(
        self,
        template: RecurringTemplate,
    ) -> RecurringTemplate:
        """Persist the date fields and execution count of a template.

        Raises:
            StaleRecordError: If the stored version differs from
                ``template.version``.
        """

    def set_active(
        self,
        template_id: int,
        is_active: bool,
        now_ms: int,
    ) -> bool:
        """Toggle a template; return False when the id is unknown."""

    def delete_template(self, template_id: int) -> bool:
        """Hard-delete a template; return False when the id is unknown."""

    def record_materialization(
        self,
        transaction: LedgerTransaction,
        template: RecurringTemplate,
    ) -> LedgerTransaction:
        """Insert an occurrence and advance its template as one unit.

        Either both writes commit or neither does.

        Raises:
            StaleRecordError: If the template changed since it was read.
        """

    def sum_active_amounts(self, transaction_type: TransactionType) -> Decimal:
        """Return the summed amount of active templates of one type."""


__all__ = ["RecurringRepositoryPort"]
