"""Domain errors for the ledger engine."""


class LedgerError(Exception):
    """Base class for ledger engine errors."""


class StaleRecordError(LedgerError):
    """Raised when a guarded update finds the row changed underneath it.

    Attributes:
        table: Table holding the record.
        record_id: Identifier of the record.
        expected_version: Version the caller read before updating.
    """

    def __init__(self, table: str, record_id: int, expected_version: int):
        super().__init__(
            f"{table} id={record_id} changed since version {expected_version}"
        )
        self.table = table
        self.record_id = record_id
        self.expected_version = expected_version


class InsufficientQuantityError(LedgerError):
    """Raised by strict sells asking for more units than are held."""

    def __init__(self, position_id: int, held, requested):
        super().__init__(
            f"Position id={position_id} holds {held}, cannot sell {requested}"
        )
        self.position_id = position_id
        self.held = held
        self.requested = requested


class DuplicatePositionError(LedgerError):
    """Raised when an open position with the same code already exists.

    Attributes:
        account_id: Account holding the position.
        code: Security code of the position.
    """

    def __init__(self, account_id: int, code: str):
        super().__init__(
            f"Account id={account_id} already holds an open {code!r} position"
        )
        self.account_id = account_id
        self.code = code


__all__ = [
    "LedgerError",
    "StaleRecordError",
    "InsufficientQuantityError",
    "DuplicatePositionError",
]
