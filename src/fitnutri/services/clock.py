"""Clock used for timestamps and day boundaries."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current timezone-aware time."""

    def today(self) -> str:
        """Return today's date as YYYY-MM-DD."""


@dataclass
class SystemClock(Clock):
    """Wall clock in a configured timezone."""

    timezone_name: str = "UTC"

    def now(self) -> datetime:
        return datetime.now(tz=ZoneInfo(self.timezone_name))

    def today(self) -> str:
        return self.now().date().isoformat()
