"""CLI adapter to materialize due recurring transactions.

This module wires the ProcessDueRecurringUseCase to the concrete database
adapter and provides a command-line entry point for a periodic job.
"""

from ledger_engine.infrastructure.container import (
    build_process_due_recurring_use_case,
)
from ledger_engine.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


def main() -> None:
    """Run the recurring batch and report its outcome."""
    get_usage_logger().info("process_recurring_cli invoked")
    logger = get_app_logger()
    use_case = build_process_due_recurring_use_case(logger=logger)

    result = use_case.run()

    print(f"Created {result.processed_count} recurring transactions.")
    for failure in result.failures:
        print(
            f"Failed template {failure.template_id} "
            f"({failure.name}): {failure.error}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
