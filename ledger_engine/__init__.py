"""Derived-state engine for a personal finance ledger."""

__version__ = "0.1.0"
