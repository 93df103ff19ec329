"""Command-line adapters for the ledger engine."""
