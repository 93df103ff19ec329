"""Domain services package."""

from .calendar_math import (
    advance,
    days_in_month,
    first_execution_date,
    month_bounds,
    shift_days,
)
from .positions import (
    SellOutcome,
    apply_sell,
    merge_buy,
    open_position,
    reprice,
    summarize_positions,
    value_position,
)
from .recurring import (
    build_occurrence,
    is_due_for_execution,
    is_due_for_reminder,
    mark_executed,
    reschedule_from,
)
from .snapshot_codec import decode_account_snapshots, encode_account_snapshots
from .snapshots import build_history, compute_monthly_snapshot
from .validation import validate_price, validate_template, validate_trade

__all__ = [
    "advance",
    "days_in_month",
    "first_execution_date",
    "month_bounds",
    "shift_days",
    "SellOutcome",
    "apply_sell",
    "merge_buy",
    "open_position",
    "reprice",
    "summarize_positions",
    "value_position",
    "build_occurrence",
    "is_due_for_execution",
    "is_due_for_reminder",
    "mark_executed",
    "reschedule_from",
    "decode_account_snapshots",
    "encode_account_snapshots",
    "build_history",
    "compute_monthly_snapshot",
    "validate_price",
    "validate_template",
    "validate_trade",
]
