"""Tests for infrastructure settings."""

from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest

from ledger_engine.infrastructure import settings as settings_module
from ledger_engine.infrastructure.settings import LedgerSettings


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(settings_module, "get_app_logger", MagicMock)
    for name in (
        "LEDGER_TIMEZONE",
        "LEDGER_REMINDER_DAYS",
        "LEDGER_STRICT_OVERSELL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults() -> None:
    settings = LedgerSettings.from_env()

    assert settings.timezone is None
    assert settings.reminder_days == 7
    assert settings.strict_oversell is False


def test_from_env_reads_values(monkeypatch) -> None:
    monkeypatch.setenv("LEDGER_TIMEZONE", "Asia/Shanghai")
    monkeypatch.setenv("LEDGER_REMINDER_DAYS", "3")
    monkeypatch.setenv("LEDGER_STRICT_OVERSELL", "TRUE")

    settings = LedgerSettings.from_env()

    assert settings.timezone == ZoneInfo("Asia/Shanghai")
    assert settings.reminder_days == 3
    assert settings.strict_oversell is True


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("LEDGER_TIMEZONE", "Mars/Olympus"),
        ("LEDGER_REMINDER_DAYS", "soon"),
        ("LEDGER_REMINDER_DAYS", "-1"),
        ("LEDGER_STRICT_OVERSELL", "maybe"),
    ],
)
def test_from_env_rejects_bad_values(monkeypatch, name, value) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(RuntimeError):
        LedgerSettings.from_env()
