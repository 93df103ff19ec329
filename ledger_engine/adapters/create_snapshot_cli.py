"""CLI adapter to capture the current month's snapshot."""

from ledger_engine.infrastructure.container import (
    build_create_monthly_snapshot_use_case,
)
from ledger_engine.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


def main() -> None:
    """Create or overwrite this month's snapshot and print its figures."""
    get_usage_logger().info("create_snapshot_cli invoked")
    logger = get_app_logger()
    use_case = build_create_monthly_snapshot_use_case(logger=logger)

    snapshot = use_case.execute()

    print(f"Snapshot {snapshot.year}-{snapshot.month:02d}")
    print(f"  Total assets:      {snapshot.total_assets}")
    print(f"  Total liabilities: {snapshot.total_liabilities}")
    print(f"  Net worth:         {snapshot.net_worth}")
    print(f"  Savings rate:      {snapshot.savings_rate:.2f}%")


if __name__ == "__main__":  # pragma: no cover
    main()
