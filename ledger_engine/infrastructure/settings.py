"""Settings helpers for the ledger engine."""

from dataclasses import dataclass
from datetime import tzinfo
import os
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import dotenv

from ledger_engine.domain.constants import DEFAULT_REMINDER_HORIZON_DAYS
from ledger_engine.infrastructure.logging.logger import get_app_logger


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class LedgerSettings:
    """Runtime settings for schedules, reminders and sells.

    Attributes:
        timezone: Calendar time zone; None means system local time.
        reminder_days: Default reminder horizon in days.
        strict_oversell: Reject sells larger than the held quantity.
    """

    timezone: Optional[tzinfo] = None
    reminder_days: int = DEFAULT_REMINDER_HORIZON_DAYS
    strict_oversell: bool = False

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.

        Raises:
            RuntimeError: If a variable holds an unusable value.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        timezone = cls._parse_timezone(os.getenv("LEDGER_TIMEZONE", ""))
        reminder_days = cls._parse_reminder_days(
            os.getenv("LEDGER_REMINDER_DAYS", "")
        )
        strict_oversell = cls._parse_flag(
            "LEDGER_STRICT_OVERSELL", os.getenv("LEDGER_STRICT_OVERSELL", "")
        )
        if timezone is None:
            logger.debug("LEDGER_TIMEZONE not set; using system local time")
        return cls(
            timezone=timezone,
            reminder_days=reminder_days,
            strict_oversell=strict_oversell,
        )

    @staticmethod
    def _parse_timezone(raw: str) -> Optional[tzinfo]:
        name = raw.strip()
        if not name:
            return None
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise RuntimeError(f"Unknown LEDGER_TIMEZONE: {name}") from exc

    @staticmethod
    def _parse_reminder_days(raw: str) -> int:
        value = raw.strip()
        if not value:
            return DEFAULT_REMINDER_HORIZON_DAYS
        try:
            days = int(value)
        except ValueError as exc:
            raise RuntimeError(
                f"LEDGER_REMINDER_DAYS must be an integer, got {value!r}"
            ) from exc
        if days < 0:
            raise RuntimeError("LEDGER_REMINDER_DAYS cannot be negative")
        return days

    @staticmethod
    def _parse_flag(name: str, raw: str) -> bool:
        value = raw.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise RuntimeError(f"{name} must be true or false, got {raw!r}")


__all__ = ["LedgerSettings"]
