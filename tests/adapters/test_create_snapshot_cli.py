"""Tests for the create_snapshot_cli adapter."""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from ledger_engine.adapters import create_snapshot_cli


def test_main_prints_snapshot_figures(monkeypatch, capsys):
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = SimpleNamespace(
        year=2024,
        month=3,
        total_assets=Decimal("5000"),
        total_liabilities=Decimal("400"),
        net_worth=Decimal("4600"),
        savings_rate=Decimal("37.5"),
    )
    monkeypatch.setattr(create_snapshot_cli, "get_app_logger", MagicMock)
    monkeypatch.setattr(create_snapshot_cli, "get_usage_logger", MagicMock)
    monkeypatch.setattr(
        create_snapshot_cli,
        "build_create_monthly_snapshot_use_case",
        lambda logger: fake_use_case,
    )

    create_snapshot_cli.main()

    fake_use_case.execute.assert_called_once_with()
    out = capsys.readouterr().out
    assert "Snapshot 2024-03" in out
    assert "4600" in out
    assert "37.50%" in out
